"""
Integration tests for the admin back office.
"""

import pytest
import pytest_asyncio

from tests.utils import API, assert_error_response, assert_page


@pytest_asyncio.fixture
async def placed_order(api_client, seller_headers, buyer_headers):
    product = await api_client.post(
        f"{API}/seller/products/", json={"title": "Dried Mangoes", "price": "12.00", "stock": 9}, headers=seller_headers
    )
    response = await api_client.post(
        f"{API}/buyer/orders/",
        json={
            "items": [{"product_id": product.json()["id"], "quantity": 5}],
            "payment_method": "bank_transfer",
            "receipt_image": "https://cdn.bilibay.ph/receipts/1.png",
        },
        headers=buyer_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_category_crud(api_client, admin_headers, seller_headers):
    created = await api_client.post(
        f"{API}/admin/categories/", json={"name": "Food & Delicacies"}, headers=admin_headers
    )
    category = created.json()
    duplicate = await api_client.post(
        f"{API}/admin/categories/", json={"name": "food & delicacies"}, headers=admin_headers
    )
    renamed = await api_client.put(
        f"{API}/admin/categories/{category['id']}",
        json={"name": "Pasalubong", "description": "Take-home treats"},
        headers=admin_headers,
    )

    assert created.status_code == 201
    assert category["slug"] == "food-delicacies"
    assert_error_response(duplicate, 409, "DUPLICATE_ENTITY")
    assert renamed.json()["slug"] == "pasalubong"

    await api_client.post(
        f"{API}/seller/products/",
        json={"title": "Otap", "price": "3.00", "stock": 1, "category_id": category["id"]},
        headers=seller_headers,
    )
    in_use = await api_client.delete(f"{API}/admin/categories/{category['id']}", headers=admin_headers)
    assert_error_response(in_use, 400, "CATEGORY_IN_USE")

    spare = await api_client.post(f"{API}/admin/categories/", json={"name": "Spare"}, headers=admin_headers)
    deleted = await api_client.delete(f"{API}/admin/categories/{spare.json()['id']}", headers=admin_headers)
    assert deleted.status_code == 204
    assert_error_response(await api_client.get(f"{API}/admin/categories/{spare.json()['id']}", headers=admin_headers), 404)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_verify_payment_marks_order_paid(api_client, placed_order, admin, admin_headers):
    pending = await api_client.get(f"{API}/admin/payments/", params={"status": "pending"}, headers=admin_headers)
    assert_page(pending.json(), total=1)
    payment_id = pending.json()["items"][0]["id"]

    verified = await api_client.put(f"{API}/admin/payments/{payment_id}/verify", headers=admin_headers)
    again = await api_client.put(f"{API}/admin/payments/{payment_id}/verify", headers=admin_headers)
    order = await api_client.get(f"{API}/admin/orders/{placed_order['id']}", headers=admin_headers)

    assert verified.json()["status"] == "paid"
    assert verified.json()["verified_by"] == str(admin.id)
    assert_error_response(again, 400, "PAYMENT_ERROR")
    assert order.json()["payment_status"] == "paid"
    assert order.json()["payment"]["receipt_image"] == "https://cdn.bilibay.ph/receipts/1.png"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_reject_payment(api_client, placed_order, admin_headers):
    payment_id = placed_order["payment"]["id"]

    rejected = await api_client.put(
        f"{API}/admin/payments/{payment_id}/reject", json={"reason": "Receipt unreadable"}, headers=admin_headers
    )
    order = await api_client.get(f"{API}/admin/orders/{placed_order['id']}", headers=admin_headers)

    assert rejected.json()["status"] == "failed"
    assert rejected.json()["failure_reason"] == "Receipt unreadable"
    assert order.json()["payment_status"] == "failed"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_cannot_verify_payment_of_cancelled_order(api_client, placed_order, admin_headers):
    cancel = await api_client.put(
        f"{API}/admin/orders/{placed_order['id']}/status",
        json={"status": "cancelled", "reason": "Fraud check"},
        headers=admin_headers,
    )
    verify = await api_client.put(f"{API}/admin/payments/{placed_order['payment']['id']}/verify", headers=admin_headers)

    assert cancel.json()["status"] == "cancelled"
    assert_error_response(verify, 400)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_admin_order_listing_by_status(api_client, placed_order, admin_headers):
    pending = await api_client.get(f"{API}/admin/orders/", params={"status": "pending"}, headers=admin_headers)
    shipped = await api_client.get(f"{API}/admin/orders/", params={"status": "shipped"}, headers=admin_headers)

    assert_page(pending.json(), total=1)
    assert_page(shipped.json(), total=0)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_user_management(api_client, admin, buyer, seller, admin_headers, buyer_headers):
    sellers = await api_client.get(f"{API}/admin/users/", params={"role": "seller"}, headers=admin_headers)
    toggled = await api_client.put(f"{API}/admin/users/{buyer.id}/toggle-status", headers=admin_headers)
    locked_out = await api_client.get(f"{API}/buyer/cart/", headers=buyer_headers)
    self_toggle = await api_client.put(f"{API}/admin/users/{admin.id}/toggle-status", headers=admin_headers)

    assert_page(sellers.json(), total=1)
    assert sellers.json()["items"][0]["email"] == seller.email
    assert toggled.json()["is_active"] is False
    assert_error_response(locked_out, 401)
    assert_error_response(self_toggle, 400, "SELF_DEACTIVATION")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_dashboard_stats(api_client, placed_order, admin_headers):
    await api_client.put(f"{API}/admin/payments/{placed_order['payment']['id']}/verify", headers=admin_headers)

    response = await api_client.get(f"{API}/admin/dashboard/stats", headers=admin_headers)

    stats = response.json()
    assert stats["total_orders"] == 1
    assert stats["total_sales"] == 60.0
    assert stats["total_users"] == 3
    assert [p["stock"] for p in stats["low_stock_products"]] == [4]
    assert stats["recent_orders"][0]["id"] == placed_order["id"]
    assert stats["pending_payments"] == []
