import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def catalogue_bed():
    from catalogue.domain import catalogue

    bed = DomainFixture(catalogue)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed):
    with catalogue_bed.domain_context():
        yield


@pytest.fixture
def create_category():
    """Create an active category through the domain and return its slug."""
    from catalogue.category.category import Category
    from catalogue.category.management import CreateCategory
    from protean import current_domain

    def _create(name="Bottled Water", **kwargs):
        category_id = current_domain.process(CreateCategory(name=name, **kwargs), asynchronous=False)
        return current_domain.repository_for(Category).get(category_id).slug

    return _create


@pytest.fixture
def create_product():
    """Create a product through the domain and return its id."""
    from catalogue.product.management import CreateProduct
    from protean import current_domain

    def _create(name="Spring Water 330ml", price=18.5, is_published=True, **kwargs):
        return current_domain.process(
            CreateProduct(name=name, price=price, is_published=is_published, **kwargs),
            asynchronous=False,
        )

    return _create
