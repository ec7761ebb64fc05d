import pytest

from marketplace.domain.value_objects import OrderStatus, ProposalStatus

CLIENT, A, B = 1, 2, 3
ORDER = 100


@pytest.fixture(autouse=True)
def seed(store):
    store.add_user(CLIENT, role="client", name="Client")
    store.add_user(A, name="Alice", balance=10)
    store.add_user(B, name="Bob", balance=10)
    store.add_user(50, role="admin", name="Admin")
    store.add_order(ORDER, client_id=CLIENT, budget=1000)


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200


def test_invalid_token_is_rejected(client):
    response = client.get("/credits/balance", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert response.json()["error"].startswith("Invalid token")


def test_missing_token_is_rejected(client):
    assert client.get("/credits/balance").status_code in (401, 403)


def test_correlation_id_is_echoed(client, auth_headers):
    response = client.get(
        "/credits/balance", headers={**auth_headers(A), "X-Correlation-ID": "req-42"}
    )
    assert response.headers["X-Correlation-ID"] == "req-42"


def test_apply_then_choose_over_http(client, store, auth_headers):
    first = client.post(
        "/order-proposals",
        json={"orderId": ORDER, "message": "I can do this"},
        headers=auth_headers(A, "specialist"),
    )
    second = client.post(
        "/order-proposals",
        json={"orderId": ORDER, "message": "Me too"},
        headers=auth_headers(B, "specialist"),
    )
    assert first.status_code == second.status_code == 201
    assert first.json()["creditCost"] == 5
    assert first.json()["balanceAfter"] == 5

    listed = client.get(f"/order-proposals/order/{ORDER}", headers=auth_headers(CLIENT))
    assert [p["userId"] for p in listed.json()] == [A, B]

    chosen = client.post(f"/chat/orders/{ORDER}/choose", headers=auth_headers(CLIENT))
    assert chosen.status_code == 200
    assert chosen.json() == {
        "message": "Application chosen",
        "chosenProposalId": first.json()["proposal"]["id"],
        "refundedCredits": 3,
    }
    assert store.orders[ORDER].status == OrderStatus.IN_PROGRESS
    assert store.balance(B) == 8

    balance = client.get("/credits/balance", headers=auth_headers(B, "specialist"))
    assert balance.json() == {"balance": 8}
    history = client.get("/credits/transactions", headers=auth_headers(B, "specialist"))
    assert [t["type"] for t in history.json()["transactions"]] == [
        "selection_refund",
        "order_application",
    ]
    assert history.json()["pagination"]["total"] == 2


def test_choose_specific_proposal(client, store, auth_headers):
    store.add_proposal(ORDER, A)
    wanted = store.add_proposal(ORDER, B)

    response = client.post(
        f"/chat/orders/{ORDER}/choose",
        json={"proposalId": wanted.id.value},
        headers=auth_headers(CLIENT),
    )

    assert response.json()["chosenProposalId"] == wanted.id.value
    assert store.proposals[wanted.id.value].status == ProposalStatus.ACCEPTED


def test_domain_errors_map_to_status_codes(client, store, auth_headers):
    not_found = client.post("/chat/orders/999/reject", headers=auth_headers(CLIENT))
    assert not_found.status_code == 404
    assert not_found.json()["code"] == "EntityNotFoundError"

    not_owner = client.post(f"/chat/orders/{ORDER}/reject", headers=auth_headers(A))
    assert not_owner.status_code == 403

    nothing_pending = client.post(f"/chat/orders/{ORDER}/choose", headers=auth_headers(CLIENT))
    assert nothing_pending.status_code == 409
    assert nothing_pending.json() == {
        "error": "No pending applications to choose from",
        "code": "InvalidStateError",
    }


def test_insufficient_balance(client, store, auth_headers):
    store.users[A].credit_balance = 1
    response = client.post(
        "/order-proposals",
        json={"orderId": ORDER, "message": "Cheap bid"},
        headers=auth_headers(A, "specialist"),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "InsufficientBalanceError"
    assert store.proposals == {}


def test_blocked_message(client, store, auth_headers):
    conversation = store.add_conversation([CLIENT, A], order_id=ORDER)
    response = client.post(
        "/chat/messages",
        json={"conversationId": conversation.id.value, "content": "call 123456789"},
        headers=auth_headers(A, "specialist"),
    )
    assert response.status_code == 422
    assert response.json()["code"] == "ContactInfoBlockedError"


def test_blocked_image_caption(client, store, auth_headers):
    conversation = store.add_conversation([CLIENT, A], order_id=ORDER)
    response = client.post(
        "/chat/messages",
        json={
            "conversationId": conversation.id.value,
            "content": "call 123456789",
            "messageType": "image",
        },
        headers=auth_headers(A, "specialist"),
    )
    assert response.status_code == 422
    assert response.json()["code"] == "ContactInfoBlockedError"


def test_system_message_type_rejected(client, store, auth_headers):
    conversation = store.add_conversation([CLIENT, A], order_id=ORDER)
    response = client.post(
        "/chat/messages",
        json={
            "conversationId": conversation.id.value,
            "content": "The client has chosen you",
            "messageType": "system",
        },
        headers=auth_headers(A, "specialist"),
    )
    assert response.status_code == 400
    assert response.json()["details"][0]["loc"][-1] == "messageType"
    assert store.messages == {}


def test_validation_error_shape(client, auth_headers):
    response = client.post(
        "/chat/messages",
        json={"conversationId": 1, "content": ""},
        headers=auth_headers(A),
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation error"
    assert body["details"][0]["loc"][-1] == "content"


def test_conversation_flow(client, store, auth_headers):
    store.add_proposal(ORDER, A, message="Hello from Alice")

    opened = client.post(f"/chat/orders/{ORDER}/conversation", headers=auth_headers(A))
    assert opened.status_code == 200
    body = opened.json()
    assert body["created"] is True
    assert body["openingMessage"]["content"] == "Hello from Alice"
    conversation_id = body["conversation"]["id"]

    assert client.get("/chat/unread-count", headers=auth_headers(CLIENT)).json() == {"count": 1}
    client.post(f"/chat/conversations/{conversation_id}/read", headers=auth_headers(CLIENT))
    assert client.get("/chat/unread-count", headers=auth_headers(CLIENT)).json() == {"count": 0}

    messages = client.get(
        f"/chat/conversations/{conversation_id}/messages", headers=auth_headers(CLIENT)
    )
    assert [m["content"] for m in messages.json()["messages"]] == ["Hello from Alice"]

    listed = client.get("/chat/conversations", headers=auth_headers(CLIENT))
    assert [c["id"] for c in listed.json()["conversations"]] == [conversation_id]

    left = client.post(f"/chat/conversations/{conversation_id}/leave", headers=auth_headers(A))
    assert left.json() == {"success": True, "conversationRemoved": False}
    outsider = client.get(f"/chat/conversations/{conversation_id}", headers=auth_headers(A))
    assert outsider.status_code == 403


def test_pricing_quote(client, auth_headers):
    response = client.get("/order-pricing/quote?budget=1000", headers=auth_headers(A))
    assert response.json()["creditCost"] == 5
    assert response.json()["refundAmount"] == 3

    team = client.get("/order-pricing/quote?budget=1000&isTeam=true", headers=auth_headers(A))
    assert team.json()["creditCost"] == 8


def test_pricing_admin_only(client, store, auth_headers):
    payload = {"minBudget": 5000, "maxBudget": None, "creditCost": 25}

    forbidden = client.post("/order-pricing", json=payload, headers=auth_headers(CLIENT))
    assert forbidden.status_code == 403
    assert forbidden.json() == {"error": "Admin role required"}

    created = client.post("/order-pricing", json=payload, headers=auth_headers(50, "admin"))
    assert created.status_code == 201
    assert created.json()["creditCost"] == 25

    tiers = client.get("/order-pricing", headers=auth_headers(A)).json()
    assert any(t["minBudget"] == 5000 and t["creditCost"] == 25 for t in tiers)


def test_metrics_endpoint(client, auth_headers):
    client.get("/credits/balance", headers=auth_headers(A))
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "http_server_request_duration_seconds" in response.text
