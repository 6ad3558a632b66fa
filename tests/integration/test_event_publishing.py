"""Cross-domain event publishing verification tests.

These tests verify that events raised by aggregates in the Identity and
Catalogue domains are stored in the outbox table during UnitOfWork commit.
The OutboxProcessor (run by the Engine) later reads these records and
publishes them to Redis Streams, where Ordering, Reviews and Notifications
pick them up.

Test strategy:
  - We test the *synchronous* half: command → aggregate mutation → event
    stored in outbox. This requires a running PostgreSQL database but not
    a running Engine or Redis.
"""

from protean import current_domain
from protean.utils.outbox import OutboxStatus


def _outbox(event_type):
    records = current_domain._get_outbox_repo("default").find_unprocessed()
    return [r for r in records if r.type == event_type]


# ---------------------------------------------------------------------------
# Identity domain: outbox tests
# ---------------------------------------------------------------------------
class TestIdentityEventOutbox:
    def test_user_registered_event_in_outbox(self, identity_ctx):
        """RegisterCustomer → UserRegistered event stored in outbox."""
        from identity.user.registration import RegisterCustomer

        user_id = current_domain.process(
            RegisterCustomer(name="Outbox Test", phone="0551234567", password="secret-pass"),
            asynchronous=False,
        )

        records = _outbox("Identity.UserRegistered.v1")
        assert len(records) == 1

        record = records[0]
        assert record.status == OutboxStatus.PENDING.value
        assert record.data["user_id"] == user_id
        assert record.data["role"] == "Customer"
        assert record.stream_name.startswith("identity::user-")

    def test_outbox_record_metadata(self, identity_ctx):
        from identity.user.registration import RegisterCustomer

        current_domain.process(
            RegisterCustomer(name="Meta Test", phone="0557654321", password="secret-pass"),
            asynchronous=False,
        )

        record = _outbox("Identity.UserRegistered.v1")[0]
        assert record.message_id is not None
        assert record.metadata_ is not None
        assert record.created_at is not None
        assert record.retry_count == 0


# ---------------------------------------------------------------------------
# Catalogue domain: outbox tests
# ---------------------------------------------------------------------------
class TestCatalogueEventOutbox:
    def test_product_created_event_in_outbox(self, catalogue_ctx):
        from catalogue.product.management import CreateProduct

        product_id = current_domain.process(
            CreateProduct(name="Spring Water 330ml", price=18.0), asynchronous=False
        )

        records = _outbox("Catalogue.ProductCreated.v1")
        assert len(records) == 1
        assert records[0].data["product_id"] == product_id
        assert records[0].data["price"] == 18.0
        assert records[0].stream_name.startswith("catalogue::product-")

    def test_publish_follows_create(self, catalogue_ctx):
        from catalogue.product.lifecycle import PublishProduct
        from catalogue.product.management import CreateProduct

        product_id = current_domain.process(
            CreateProduct(name="Sparkling 250ml", price=32.5), asynchronous=False
        )
        current_domain.process(PublishProduct(product_id=product_id), asynchronous=False)

        assert len(_outbox("Catalogue.ProductPublished.v1")) == 1
