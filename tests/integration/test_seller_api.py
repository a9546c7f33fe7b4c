"""
Integration tests for seller listings and seller order fulfilment.
"""

import pytest
import pytest_asyncio

from tests.utils import API, assert_error_response, assert_page, auth_headers, create_user


@pytest_asyncio.fixture
async def product(api_client, seller_headers):
    response = await api_client.post(
        f"{API}/seller/products/",
        json={"title": "Abaca Tote", "price": "35.50", "stock": 4, "images": ["https://cdn.bilibay.ph/tote.jpg"]},
        headers=seller_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest_asyncio.fixture
async def other_seller_headers(db_session):
    return auth_headers(await create_user(db_session, "seller", "rival@example.com"))


@pytest_asyncio.fixture
async def order(api_client, product, buyer_headers):
    response = await api_client.post(
        f"{API}/buyer/orders/",
        json={"items": [{"product_id": product["id"], "quantity": 1}], "payment_method": "cod"},
        headers=buyer_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_seller_lists_own_products_including_drafts(api_client, product, seller, seller_headers):
    await api_client.post(
        f"{API}/seller/products/", json={"title": "WIP", "price": "1.00", "status": "draft"}, headers=seller_headers
    )

    everything = await api_client.get(f"{API}/seller/products/", headers=seller_headers)
    drafts = await api_client.get(f"{API}/seller/products/", params={"status": "draft"}, headers=seller_headers)

    assert_page(everything.json(), total=2)
    assert product["seller_id"] == str(seller.id)
    assert [p["title"] for p in drafts.json()["items"]] == ["WIP"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_invalid_product_payloads(api_client, seller_headers):
    no_price = await api_client.post(f"{API}/seller/products/", json={"title": "Free"}, headers=seller_headers)
    bad_status = await api_client.post(
        f"{API}/seller/products/", json={"title": "Odd", "price": "2.00", "status": "archived"}, headers=seller_headers
    )

    assert_error_response(no_price, 422)
    assert_error_response(bad_status, 400, "VALIDATION_ERROR")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_free_product_can_be_listed_and_repriced(api_client, product, seller_headers):
    free = await api_client.post(
        f"{API}/seller/products/", json={"title": "Sample Sachet", "price": "0", "stock": 50}, headers=seller_headers
    )
    repriced = await api_client.put(
        f"{API}/seller/products/{product['id']}", json={"price": "0.00"}, headers=seller_headers
    )

    assert free.status_code == 201
    assert free.json()["price"] == 0.0
    assert free.json()["status"] == "available"
    assert repriced.status_code == 200
    assert repriced.json()["price"] == 0.0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_sold_status_requires_zero_stock(api_client, product, seller_headers):
    marked = await api_client.put(
        f"{API}/seller/products/{product['id']}", json={"status": "sold"}, headers=seller_headers
    )
    created = await api_client.post(
        f"{API}/seller/products/",
        json={"title": "Odd", "price": "2.00", "stock": 3, "status": "sold"},
        headers=seller_headers,
    )
    sold_out = await api_client.put(
        f"{API}/seller/products/{product['id']}", json={"status": "sold", "stock": 0}, headers=seller_headers
    )

    assert_error_response(marked, 400, "VALIDATION_ERROR")
    assert_error_response(created, 400, "VALIDATION_ERROR")
    assert sold_out.json()["status"] == "sold"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_stock_drives_status(api_client, product, seller_headers):
    sold = await api_client.put(f"{API}/seller/products/{product['id']}", json={"stock": 0}, headers=seller_headers)
    restocked = await api_client.put(
        f"{API}/seller/products/{product['id']}", json={"stock": 6, "price": "39.00"}, headers=seller_headers
    )

    assert sold.json()["status"] == "sold"
    body = restocked.json()
    assert body["status"] == "available"
    assert body["price"] == 39.0
    assert body["title"] == "Abaca Tote"
    assert body["images"] == ["https://cdn.bilibay.ph/tote.jpg"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_other_sellers_cannot_touch_the_product(api_client, product, other_seller_headers):
    update = await api_client.put(
        f"{API}/seller/products/{product['id']}", json={"title": "Stolen"}, headers=other_seller_headers
    )
    delete = await api_client.delete(f"{API}/seller/products/{product['id']}", headers=other_seller_headers)

    assert_error_response(update, 404)
    assert_error_response(delete, 404)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_delete_product_clears_cart_lines(api_client, product, seller_headers, buyer_headers):
    await api_client.post(f"{API}/buyer/cart/", json={"product_id": product["id"]}, headers=buyer_headers)

    deleted = await api_client.delete(f"{API}/seller/products/{product['id']}", headers=seller_headers)

    assert deleted.status_code == 204
    assert (await api_client.get(f"{API}/buyer/cart/", headers=buyer_headers)).json()["items"] == []
    assert_error_response(await api_client.get(f"{API}/buyer/products/{product['id']}"), 404)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_seller_fulfils_order(api_client, order, seller_headers, buyer_headers):
    listing = await api_client.get(f"{API}/seller/orders/", headers=seller_headers)
    assert_page(listing.json(), total=1)

    base = f"{API}/seller/orders/{order['id']}"
    processing = await api_client.put(f"{base}/status", json={"status": "processing"}, headers=seller_headers)
    shipped = await api_client.put(
        f"{base}/status", json={"status": "shipped", "tracking_number": "LBC-0099"}, headers=seller_headers
    )
    backwards = await api_client.put(f"{base}/status", json={"status": "processing"}, headers=seller_headers)
    buyer_cancel = await api_client.post(f"{API}/buyer/orders/{order['id']}/cancel", headers=buyer_headers)
    delivered = await api_client.put(f"{base}/status", json={"status": "delivered"}, headers=seller_headers)

    assert processing.json()["status"] == "processing"
    assert shipped.json()["tracking_number"] == "LBC-0099"
    assert_error_response(backwards, 400, "INVALID_OPERATION")
    assert_error_response(buyer_cancel, 400, "INVALID_OPERATION")
    assert delivered.json()["status"] == "delivered"
    assert delivered.json()["delivered_at"] is not None


@pytest.mark.integration
@pytest.mark.asyncio
async def test_seller_only_sees_orders_with_their_products(api_client, order, other_seller_headers):
    listing = await api_client.get(f"{API}/seller/orders/", headers=other_seller_headers)
    detail = await api_client.get(f"{API}/seller/orders/{order['id']}", headers=other_seller_headers)
    update = await api_client.put(
        f"{API}/seller/orders/{order['id']}/status", json={"status": "processing"}, headers=other_seller_headers
    )

    assert_page(listing.json(), total=0)
    assert_error_response(detail, 404)
    assert_error_response(update, 404)
