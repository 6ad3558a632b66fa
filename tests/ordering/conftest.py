import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture()
def add_driver():
    """Put a driver on the roster, the way identity events would."""
    from ordering.projections.driver_roster import DriverRoster

    def _add(driver_id="driver-1", name="Khalid", is_active=True, max_orders=3):
        current_domain.repository_for(DriverRoster).add(
            DriverRoster(driver_id=driver_id, name=name, phone="0551112222", is_active=is_active, max_orders=max_orders)
        )
        return driver_id

    return _add


@pytest.fixture()
def add_address():
    from ordering.projections.delivery_address import DeliveryAddress

    def _add(user_id="user-1", address_id="addr-1", **overrides):
        values = {
            "label": "Home",
            "district": "Al Olaya",
            "street": "King Fahd Road",
            "building_number": "12",
            "delivery_instructions": "Ring twice",
            **overrides,
        }
        current_domain.repository_for(DeliveryAddress).add(
            DeliveryAddress(address_id=address_id, user_id=user_id, **values)
        )
        return address_id

    return _add


@pytest.fixture()
def add_product():
    from ordering.projections.product_price import ProductPrice

    def _add(product_id="prod-1", name="Spring Water 330ml", price=10.0, **overrides):
        values = {"is_published": True, **overrides}
        current_domain.repository_for(ProductPrice).add(
            ProductPrice(product_id=product_id, name=name, price=price, **values)
        )
        return product_id

    return _add


@pytest.fixture()
def add_shift():
    from ordering.shift.management import CreateShift

    def _add(name="Morning", start_time="08:00", end_time="12:00", is_active=True):
        return current_domain.process(
            CreateShift(name=name, start_time=start_time, end_time=end_time, is_active=is_active),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def place_order(add_address, add_product, add_shift):
    """Check out a one-line cart and return the new order's id."""
    from ordering.cart.items import AddToCart
    from ordering.checkout.placement import PlaceOrder

    seeded = set()

    def _place(user_id="user-1", product_id="prod-1", quantity=2, price=10.0):
        address_id = f"addr-{user_id}"
        if address_id not in seeded:
            add_address(user_id=user_id, address_id=address_id)
            seeded.add(address_id)
        if product_id not in seeded:
            add_product(product_id=product_id, price=price)
            seeded.add(product_id)
        shift_id = add_shift()
        current_domain.process(
            AddToCart(user_id=user_id, product_id=product_id, quantity=quantity), asynchronous=False
        )
        result = current_domain.process(
            PlaceOrder(
                user_id=user_id,
                full_name="Sara Ali",
                phone="055 123 4567",
                address_id=address_id,
                shift_id=shift_id,
                payment_method="CASH",
                terms_accepted=True,
            ),
            asynchronous=False,
        )
        return result["order_id"]

    return _place
