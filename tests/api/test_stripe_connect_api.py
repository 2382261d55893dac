"""HTTP tests for the Stripe Connect endpoints."""

from unittest.mock import Mock

from trylocal.core.errors import CATEGORY_AUTHENTICATION, ExternalServiceError
from trylocal.main import app
from trylocal.services.payments import PaymentsClient, get_payments_client

PREFIX = "/api/v1/stripe/connect"


def _create(client, business_id="biz-1"):
    return client.post(f"{PREFIX}/create-account", json={
        "businessId": business_id,
        "email": "owner@rosecity.test",
        "businessName": "Rose City Bakery",
    })


def test_create_account(client, repo):
    response = _create(client)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Stripe Connect account created successfully"
    assert repo.documents["biz-1"]["stripeConnectedAccountId"] == body["accountId"]


def test_create_account_twice_returns_existing(client, payments):
    first = _create(client).json()
    second = _create(client)

    assert second.status_code == 200
    assert second.json()["accountId"] == first["accountId"]
    assert second.json()["message"] == "Account already exists"
    assert len(payments.created) == 1


def test_create_account_requires_email(client):
    response = client.post(f"{PREFIX}/create-account", json={"businessId": "biz-1"})

    assert response.status_code == 400
    assert response.json() == {"error": "Business ID and email are required"}


def test_create_account_unknown_business(client):
    response = _create(client, business_id="missing")

    assert response.status_code == 404
    assert response.json() == {"error": "Business not found"}


def test_account_status_verified(client, payments, repo):
    account_id = _create(client).json()["accountId"]
    payments.set_flags(account_id, charges_enabled=True, payouts_enabled=True, details_submitted=True)

    response = client.post(f"{PREFIX}/account-status", json={"accountId": account_id, "businessId": "biz-1"})

    assert response.status_code == 200
    body = response.json()
    assert body["accountId"] == account_id
    assert body["accountStatus"] == "verified"
    assert body["chargesEnabled"] is True
    assert body["payoutsEnabled"] is True
    assert body["detailsSubmitted"] is True
    assert body["requirements"] == {}
    assert repo.documents["biz-1"]["stripeAccountStatus"] == "verified"


def test_account_status_requires_account_id(client):
    response = client.post(f"{PREFIX}/account-status", json={"businessId": "biz-1"})

    assert response.status_code == 400
    assert response.json() == {"error": "Account ID is required"}


def test_account_status_unknown_account(client):
    response = client.post(f"{PREFIX}/account-status", json={"accountId": "acct_missing"})

    assert response.status_code == 404
    assert "error" in response.json()


def test_account_link(client):
    account_id = _create(client).json()["accountId"]

    response = client.post(f"{PREFIX}/account-link", json={"accountId": account_id, "businessId": "biz-1"})

    assert response.status_code == 200
    assert response.json()["url"].endswith(account_id)
    assert response.json()["message"] == "Account link created successfully"


def test_account_link_requires_business(client):
    account_id = _create(client).json()["accountId"]

    response = client.post(f"{PREFIX}/account-link", json={"accountId": account_id})

    assert response.status_code == 400
    assert response.json() == {"error": "Business ID is required"}


def test_account_status_rejects_foreign_account(client, repo):
    _create(client, "biz-2")
    foreign = _create(client, "biz-1").json()["accountId"]

    response = client.post(f"{PREFIX}/account-status", json={"accountId": foreign, "businessId": "biz-2"})

    assert response.status_code == 400
    assert response.json() == {"error": "Account does not belong to this business"}
    assert repo.documents["biz-2"]["stripeConnectedAccountId"] != foreign


def test_account_link_unknown_account(client):
    response = client.post(f"{PREFIX}/account-link", json={"accountId": "acct_missing", "businessId": "biz-1"})

    assert response.status_code == 404


def test_provider_errors_are_sanitized(client):
    failing = Mock(spec=PaymentsClient)
    failing.retrieve_account.side_effect = ExternalServiceError(
        message="Invalid API Key provided: sk_live_****1234",
        category=CATEGORY_AUTHENTICATION,
        public_message="Payment provider request failed",
    )
    app.dependency_overrides[get_payments_client] = lambda: failing

    response = client.post(f"{PREFIX}/account-status", json={"accountId": "acct_1"})

    assert response.status_code == 500
    assert response.json() == {"error": "Payment provider request failed"}
    assert "sk_live" not in response.text


def test_malformed_body_is_400(client):
    response = client.post(f"{PREFIX}/account-link", content="not json", headers={"content-type": "application/json"})

    assert response.status_code == 400
    assert "error" in response.json()
