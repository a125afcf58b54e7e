import pytest
from protean.integrations.pytest import DomainFixture

GHEE = {
    "id": "buffalo-ghee",
    "name_english": "Buffalo Ghee",
    "name_hindi": "भैंस का घी",
    "name_marathi": "म्हशीचे तूप",
    "price": 800,
    "unit": "1 kg",
    "category": "ghee",
    "featured": True,
}
COW_MILK = {
    "id": "cow-milk",
    "name_english": "Cow Milk",
    "name_hindi": "गाय का दूध",
    "price": 60,
    "unit": "1 litre",
    "category": "milk",
}
DAHI = {
    "id": "dahi",
    "name_english": "Dahi",
    "price": 40,
    "unit": "500 g",
}
SHRIKHAND = {
    "id": "shrikhand",
    "name_english": "Kesar Shrikhand",
    "price": 120,
    "unit": "250 g",
    "category": "sweets",
    "in_stock": False,
}

CATALOGUE = [GHEE, COW_MILK, DAHI, SHRIKHAND]

MORNING_SLOT = "Morning (7 AM - 10 AM)"


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

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def settings():
    from ordering.config import StoreSettings

    return StoreSettings()


@pytest.fixture()
def products():
    """Seed the catalogue and return the stored products by id."""
    from ordering.catalogue.product import Product
    from protean import current_domain

    repo = current_domain.repository_for(Product)
    stored = {}
    for record in CATALOGUE:
        product = Product.from_record(record)
        repo.add(product)
        stored[record["id"]] = product
    return stored


@pytest.fixture()
def catalog(products):
    from ordering.catalogue.catalog import ProductCatalog

    return ProductCatalog()


@pytest.fixture()
def email():
    from notifications.channel import set_email_channel
    from notifications.channel.fake_email import FakeEmailAdapter

    adapter = FakeEmailAdapter()
    set_email_channel(adapter)
    return adapter


@pytest.fixture()
def requester():
    from ordering.auth import Requester

    return Requester(uid="user-001", email="asha@example.com", display_name="Asha Patil")


@pytest.fixture()
def checkout_form():
    from ordering.checkout.form import CheckoutForm

    return CheckoutForm(
        name="Asha Patil",
        phone="9876543210",
        address="12 Station Road, Kalyan West",
        delivery_slot=MORNING_SLOT,
        email="asha@example.com",
    )
