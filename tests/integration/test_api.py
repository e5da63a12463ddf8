"""Integration tests for the pool HTTP API."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from simpleswap.api.endpoints import get_pool
from simpleswap.api.main import app
from simpleswap.constants import PRICE_SCALE
from simpleswap.pool.simple_swap import SimpleSwap
from simpleswap.safe_int import UINT256_MAX
from tests.helpers import ALICE, BOB, DEADLINE, PAST_DEADLINE, POOL, STRANGER_TOKEN, TOKEN_A, TOKEN_B, make_pool


@pytest.fixture
def pool() -> SimpleSwap:
    return make_pool()


@pytest.fixture
def client(pool: SimpleSwap) -> Iterator[TestClient]:
    """Test client serving a fresh pool."""
    app.dependency_overrides[get_pool] = lambda: pool
    yield TestClient(app)
    app.dependency_overrides.clear()


def fund_and_approve(client: TestClient, account: str, amount: int) -> None:
    for token in (TOKEN_A, TOKEN_B):
        response = client.post(f"/tokens/{token}/mint", json={"to": account, "amount": str(amount)})
        assert response.status_code == 200
        response = client.post(
            f"/tokens/{token}/approve",
            json={"owner": account, "spender": POOL, "amount": str(UINT256_MAX)},
        )
        assert response.status_code == 200


def add_liquidity_payload(amount_a: int, amount_b: int, sender: str = ALICE, deadline: int = DEADLINE) -> dict:
    return {
        "sender": sender,
        "tokenA": TOKEN_A,
        "tokenB": TOKEN_B,
        "amountADesired": str(amount_a),
        "amountBDesired": str(amount_b),
        "amountAMin": "0",
        "amountBMin": "0",
        "to": sender,
        "deadline": deadline,
    }


def swap_payload(amount_in: int, path: list[str], amount_out_min: int = 0, sender: str = BOB) -> dict:
    return {
        "sender": sender,
        "amountIn": str(amount_in),
        "amountOutMin": str(amount_out_min),
        "path": path,
        "to": sender,
        "deadline": DEADLINE,
    }


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestPoolEndpoints:
    def test_empty_pool(self, client):
        response = client.get("/pool")
        assert response.status_code == 200
        assert response.json() == {
            "address": POOL,
            "tokenA": TOKEN_A,
            "tokenB": TOKEN_B,
            "reserveA": "0",
            "reserveB": "0",
            "totalSupply": "0",
        }

    def test_add_liquidity(self, client):
        fund_and_approve(client, ALICE, 1000)

        response = client.post("/liquidity/add", json=add_liquidity_payload(200, 50))

        assert response.status_code == 200
        assert response.json() == {"amountA": "200", "amountB": "50", "liquidity": "100"}
        pool = client.get("/pool").json()
        assert (pool["reserveA"], pool["reserveB"], pool["totalSupply"]) == ("200", "50", "100")

    def test_swap_and_price(self, client):
        fund_and_approve(client, ALICE, 1000)
        fund_and_approve(client, BOB, 1000)
        client.post("/liquidity/add", json=add_liquidity_payload(100, 100))

        response = client.post("/swap", json=swap_payload(10, [TOKEN_A, TOKEN_B]))

        assert response.status_code == 200
        assert response.json() == {"amountOut": "9"}
        price = client.get("/price", params={"tokenA": TOKEN_A, "tokenB": TOKEN_B})
        assert price.status_code == 200
        assert price.json()["price"] == str(91 * PRICE_SCALE // 110)

    def test_remove_liquidity(self, client):
        fund_and_approve(client, ALICE, 1000)
        client.post("/liquidity/add", json=add_liquidity_payload(200, 50))

        response = client.post(
            "/liquidity/remove",
            json={
                "sender": ALICE,
                "tokenA": TOKEN_A,
                "tokenB": TOKEN_B,
                "liquidity": "100",
                "amountAMin": "0",
                "amountBMin": "0",
                "to": ALICE,
                "deadline": DEADLINE,
            },
        )

        assert response.status_code == 200
        assert response.json() == {"amountA": "200", "amountB": "50"}
        balance = client.get(f"/tokens/{TOKEN_A}/balance/{ALICE}")
        assert balance.json()["balance"] == "1000"

    def test_amount_out(self, client):
        response = client.get("/amount-out", params={"amountIn": 10, "reserveIn": 100, "reserveOut": 100})
        assert response.status_code == 200
        assert response.json() == {"amountOut": "9"}

    def test_claim_balance(self, client):
        fund_and_approve(client, ALICE, 1000)
        client.post("/liquidity/add", json=add_liquidity_payload(200, 50))

        response = client.get(f"/tokens/{POOL}/balance/{ALICE}")
        assert response.json()["balance"] == "100"

    def test_events(self, client):
        fund_and_approve(client, ALICE, 1000)
        fund_and_approve(client, BOB, 1000)
        client.post("/liquidity/add", json=add_liquidity_payload(100, 100))
        client.post("/swap", json=swap_payload(10, [TOKEN_A, TOKEN_B]))

        events = client.get("/events").json()["events"]

        assert [e["name"] for e in events] == ["LiquidityAdded", "Swap"]
        swap = events[1]
        assert swap["signature"] == "Swap(address,address,address,uint256,uint256)"
        assert swap["args"]["amountOut"] == "9"
        assert swap["data"].startswith("0x")
        assert len(swap["data"]) == 2 + 5 * 64


class TestErrorResponses:
    def test_zero_amount_is_bad_request(self, client):
        response = client.post("/liquidity/add", json=add_liquidity_payload(0, 50))
        assert response.status_code == 400
        assert response.json() == {"detail": "Amounts cannot be zero", "error": "ZeroAmount"}

    def test_past_deadline(self, client):
        fund_and_approve(client, ALICE, 1000)
        response = client.post("/liquidity/add", json=add_liquidity_payload(100, 100, deadline=PAST_DEADLINE))
        assert response.status_code == 400
        assert response.json()["detail"] == "Deadline exceeded"

    def test_empty_pool_swap_is_conflict(self, client):
        fund_and_approve(client, BOB, 1000)
        response = client.post("/swap", json=swap_payload(10, [TOKEN_A, TOKEN_B]))
        assert response.status_code == 409
        assert response.json()["error"] == "InsufficientLiquidity"

    def test_missing_allowance_is_bad_gateway(self, client):
        client.post(f"/tokens/{TOKEN_A}/mint", json={"to": ALICE, "amount": "100"})
        client.post(f"/tokens/{TOKEN_B}/mint", json={"to": ALICE, "amount": "100"})

        response = client.post("/liquidity/add", json=add_liquidity_payload(100, 100))

        assert response.status_code == 502
        assert response.json()["error"] == "InsufficientAllowance"
        assert client.get("/pool").json()["totalSupply"] == "0"

    def test_claim_token_mint_is_forbidden(self, client):
        response = client.post(f"/tokens/{POOL}/mint", json={"to": ALICE, "amount": "1"})
        assert response.status_code == 403

    def test_unknown_token(self, client):
        response = client.get(f"/tokens/{STRANGER_TOKEN}/balance/{ALICE}")
        assert response.status_code == 404

    def test_invalid_account(self, client):
        response = client.get(f"/tokens/{TOKEN_A}/balance/not-an-address")
        assert response.status_code == 400

    def test_price_of_unknown_asset(self, client):
        response = client.get("/price", params={"tokenA": TOKEN_A, "tokenB": STRANGER_TOKEN})
        assert response.status_code == 400
        assert response.json()["error"] == "UnknownAsset"

    def test_malformed_amount_is_unprocessable(self, client):
        payload = add_liquidity_payload(100, 100)
        payload["amountADesired"] = "-5"
        response = client.post("/liquidity/add", json=payload)
        assert response.status_code == 422

    def test_bad_path_length(self, client):
        response = client.post("/swap", json=swap_payload(10, [TOKEN_A]))
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidPath"
