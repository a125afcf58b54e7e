"""Shared BDD fixtures and Given steps for checkout."""

import pytest
from ordering.auth import Requester
from ordering.cart.engine import CartEngine
from ordering.catalogue.product import Product
from protean import current_domain
from pytest_bdd import given, parsers


@pytest.fixture()
def error():
    """Container to capture exceptions from When steps."""
    return {"exc": None}


@pytest.fixture()
def outcome():
    return {"order_id": None}


@pytest.fixture()
def cart(catalog, settings):
    return CartEngine("bdd-session", catalog=catalog, settings=settings)


@given("the catalogue is stocked")
def catalogue_is_stocked(products):
    assert products


@given("a signed-in customer", target_fixture="customer")
def signed_in_customer():
    return Requester(uid="user-001", email="asha@example.com", display_name="Asha Patil")


@given("the customer signs out", target_fixture="customer")
def customer_signs_out():
    return None


@given(parsers.cfparse('the cart holds {quantity:d} "{product_id}"'))
def cart_holds(cart, quantity, product_id):
    cart.add_item(product_id, quantity)


@given(parsers.cfparse('"{product_id}" goes out of stock'))
def product_goes_out_of_stock(catalog, product_id):
    repo = current_domain.repository_for(Product)
    product = repo.get(product_id)
    product.in_stock = False
    repo.add(product)
    catalog.refresh()
