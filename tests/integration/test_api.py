"""Integration tests for API endpoints"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from fintrack.api.dependencies import get_insight_client
from fintrack.domain.exceptions import InsightNotConfiguredError, InvalidInsightResponseError
from fintrack.domain.models import FinancialHealthScore, SavingsOpportunity

pytestmark = pytest.mark.integration


def add_transactions(client: TestClient, *transactions: dict) -> list[dict]:
    response = client.post("/v1/transactions/batch", json={"transactions": list(transactions)})
    assert response.status_code == 201
    return response.json()


def expense(day: str, amount: str, category: str = "Groceries", description: str = "Test") -> dict:
    return {"date": day, "description": description, "amount": amount, "type": "expense", "category": category}


def budget_progress_for(client: TestClient, name: str, reference_date: str) -> dict:
    data = client.get("/v1/budgets/progress", params={"reference_date": reference_date}).json()
    return next(p for p in data["budgets"] if p["budget"]["name"] == name)


class FakeInsightClient:
    """Stands in for the language model client"""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []

    async def get_savings_opportunities(self, transaction_history, asset_summary):
        self.calls.append(("savings_opportunities", transaction_history, asset_summary))
        if self.error:
            raise self.error
        return [
            SavingsOpportunity(
                category="Spending Reduction",
                description="Dining out could be trimmed.",
                potential_savings="$40/month",
            )
        ]

    async def get_financial_health_score(self, asset_summary, debt_summary, income, expenses):
        self.calls.append(("health_score", asset_summary, debt_summary, income, expenses))
        if self.error:
            raise self.error
        return FinancialHealthScore(
            score=710,
            assessment="Good",
            positive_factors=["Positive cash flow."],
            areas_for_improvement=["Build an emergency fund."],
        )


def use_insight_client(client: TestClient, fake: FakeInsightClient) -> None:
    client.app.dependency_overrides[get_insight_client] = lambda: fake


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_id_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_metrics_endpoint(client: TestClient):
    """Budget tier counters show up after a progress evaluation"""
    client.get("/v1/budgets/progress")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "fintrack_budget_evaluations_total" in response.text
    assert "http_request_duration_seconds" in response.text


# Transactions


def test_transaction_batch_and_listing(client: TestClient):
    created = add_transactions(
        client,
        expense("2024-07-03", "60.00"),
        expense("2024-07-20", "12.50", category="Dining Out"),
        {"date": "2024-06-30", "description": "Salary", "amount": "3500", "type": "income", "category": "Salary"},
    )

    assert len(created) == 3
    assert all(t["id"] for t in created)
    assert [t["date"] for t in created] == ["2024-07-20", "2024-07-03", "2024-06-30"]

    listed = client.get("/v1/transactions").json()
    assert [t["date"] for t in listed] == ["2024-07-20", "2024-07-03", "2024-06-30"]
    assert Decimal(listed[0]["amount"]) == Decimal("12.50")

    july = client.get("/v1/transactions", params={"year": 2024, "month": 7}).json()
    assert len(july) == 2


def test_transaction_month_filter_needs_both_parts(client: TestClient):
    response = client.get("/v1/transactions", params={"year": 2024})
    assert response.status_code == 400


@pytest.mark.parametrize(
    "payload",
    [
        {"transactions": []},
        {"transactions": [expense("2024-07-03", "-5")]},
        {"transactions": [{**expense("2024-07-03", "5"), "type": "transfer"}]},
    ],
)
def test_transaction_batch_validation(client: TestClient, payload: dict):
    response = client.post("/v1/transactions/batch", json=payload)
    assert response.status_code == 422


def test_transaction_update_and_delete(client: TestClient):
    [created] = add_transactions(client, expense("2024-07-03", "60"))

    response = client.put(f"/v1/transactions/{created['id']}", json=expense("2024-07-04", "65", description="Fixed"))
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]
    assert response.json()["description"] == "Fixed"

    assert client.delete(f"/v1/transactions/{created['id']}").status_code == 204
    assert client.get("/v1/transactions").json() == []


def test_transaction_unknown_id_returns_404(client: TestClient):
    assert client.put("/v1/transactions/missing", json=expense("2024-07-04", "65")).status_code == 404
    assert client.delete("/v1/transactions/missing").status_code == 404


def test_transaction_replace_all(client: TestClient):
    add_transactions(client, expense("2024-07-03", "60"), expense("2024-07-04", "10"))

    response = client.put(
        "/v1/transactions",
        json=[{**expense("2024-07-05", "99"), "id": "imported-1"}, expense("2024-07-06", "1")],
    )

    assert response.status_code == 200
    listed = client.get("/v1/transactions").json()
    assert len(listed) == 2
    assert "imported-1" in {t["id"] for t in listed}


# Budgets


def test_budget_crud(client: TestClient):
    response = client.post("/v1/budgets", json={"name": "Food", "amount": "400", "category": "Groceries", "period": "monthly"})
    assert response.status_code == 201
    budget = response.json()

    assert client.get(f"/v1/budgets/{budget['id']}").json()["name"] == "Food"

    updated = client.put(
        f"/v1/budgets/{budget['id']}",
        json={"name": "Food", "amount": "450", "category": "Groceries", "period": "weekly"},
    ).json()
    assert Decimal(updated["amount"]) == Decimal("450")
    assert updated["period"] == "weekly"

    assert client.delete(f"/v1/budgets/{budget['id']}").status_code == 204
    assert client.get(f"/v1/budgets/{budget['id']}").status_code == 404


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Zero", "amount": "0", "category": "Groceries", "period": "monthly"},
        {"name": "Custom", "amount": "100", "category": "Groceries", "period": "custom"},
        {"name": "Yearly", "amount": "100", "category": "Groceries", "period": "yearly"},
    ],
)
def test_budget_validation(client: TestClient, payload: dict):
    assert client.post("/v1/budgets", json=payload).status_code == 422


def test_budget_options(client: TestClient):
    data = client.get("/v1/budgets/options").json()

    periods = {p["value"]: p for p in data["periods"]}
    assert set(periods) == {"monthly", "weekly", "bi-weekly", "custom"}
    assert periods["monthly"]["auto_calculated"] is True
    assert periods["custom"]["auto_calculated"] is False
    assert "Manual Tracking" in periods["bi-weekly"]["label"]
    assert "Groceries" in data["categories"]


def test_budget_progress(client: TestClient):
    add_transactions(
        client,
        expense("2024-07-05", "40"),
        expense("2024-07-20", "60"),
        expense("2024-06-28", "999"),
        {"date": "2024-07-10", "description": "Refund", "amount": "500", "type": "income", "category": "Groceries"},
        expense("2024-07-16", "45", category="Transport"),
    )
    client.put(
        "/v1/budgets",
        json=[
            {"id": "groceries", "name": "Groceries", "amount": "125", "category": "Groceries", "period": "monthly"},
            {"id": "transport", "name": "Transport", "amount": "50", "category": "Transport", "period": "weekly"},
            {"id": "paycheck", "name": "Paycheck", "amount": "200", "category": "Groceries", "period": "bi-weekly"},
        ],
    )

    response = client.get("/v1/budgets/progress", params={"reference_date": "2024-07-15"})

    assert response.status_code == 200
    data = response.json()
    assert data["reference_date"] == "2024-07-15"
    progress = {p["budget"]["id"]: p for p in data["budgets"]}

    groceries = progress["groceries"]
    assert Decimal(groceries["spent_amount"]) == Decimal("100")
    assert groceries["percentage"] == pytest.approx(80.0)
    assert groceries["severity"] == "warning"
    assert groceries["period_start"] == "2024-07-01"
    assert groceries["period_end"] == "2024-07-31"

    transport = progress["transport"]
    assert Decimal(transport["spent_amount"]) == Decimal("45")
    assert transport["percentage"] == pytest.approx(90.0)
    assert transport["severity"] == "warning"
    assert transport["period_start"] == "2024-07-15"

    paycheck = progress["paycheck"]
    assert paycheck["is_auto_calculated"] is False
    assert Decimal(paycheck["spent_amount"]) == Decimal("0")
    assert paycheck["severity"] == "manual"
    assert paycheck["period_start"] is None


def test_single_budget_progress_overspent(client: TestClient):
    add_transactions(client, expense("2024-07-05", "140"))
    budget = client.post(
        "/v1/budgets", json={"name": "Groceries", "amount": "100", "category": "Groceries", "period": "monthly"}
    ).json()

    data = client.get(f"/v1/budgets/{budget['id']}/progress", params={"reference_date": "2024-07-31"}).json()

    assert data["percentage"] == 100
    assert data["severity"] == "critical"
    assert data["overspent"] is True
    assert client.get("/v1/budgets/missing/progress").status_code == 404


# Assets, debts, goals


def test_asset_last_updated_stamped(client: TestClient):
    response = client.post("/v1/assets", json={"name": "Savings", "type": "bank", "value": "15000"})

    assert response.status_code == 201
    assert response.json()["last_updated"] is not None
    assert client.post("/v1/assets", json={"name": "Gold", "type": "metal", "value": "1"}).status_code == 422


def test_debt_payment_capped(client: TestClient):
    debt = client.post("/v1/debts", json={"name": "Car Loan", "total_amount": "18000", "amount_paid": "17500"}).json()

    paid = client.post(f"/v1/debts/{debt['id']}/payments", json={"amount": "900"}).json()

    assert Decimal(paid["amount_paid"]) == Decimal("18000")
    assert client.post(f"/v1/debts/{debt['id']}/payments", json={"amount": "0"}).status_code == 422
    assert client.post("/v1/debts/missing/payments", json={"amount": "10"}).status_code == 404


def test_debt_paid_cannot_exceed_total(client: TestClient):
    response = client.post("/v1/debts", json={"name": "Card", "total_amount": "100", "amount_paid": "150"})
    assert response.status_code == 422


def test_goal_contribution_capped(client: TestClient):
    goal = client.post("/v1/goals", json={"name": "Trip", "target_amount": "5000", "current_amount": "4900"}).json()

    first = client.post(f"/v1/goals/{goal['id']}/contributions", json={"amount": "50"}).json()
    second = client.post(f"/v1/goals/{goal['id']}/contributions", json={"amount": "500"}).json()

    assert Decimal(first["current_amount"]) == Decimal("4950")
    assert Decimal(second["current_amount"]) == Decimal("5000")


# Reports


def test_reports(client: TestClient):
    add_transactions(
        client,
        expense("2024-07-02", "120", category="Utilities"),
        expense("2024-07-03", "80"),
        {"date": "2024-07-01", "description": "Salary", "amount": "3500", "type": "income", "category": "Salary"},
    )
    client.post("/v1/assets", json={"name": "Savings", "type": "bank", "value": "10000"})
    client.post("/v1/debts", json={"name": "Card", "total_amount": "3000", "amount_paid": "1000"})

    spending = client.get("/v1/reports/spending-by-category", params={"reference_date": "2024-07-15"}).json()
    assert [c["category"] for c in spending["categories"]] == ["Utilities", "Groceries"]
    assert spending["categories"][0]["share"] == pytest.approx(60.0)
    assert Decimal(spending["total"]) == Decimal("200")

    flow = client.get("/v1/reports/cash-flow", params={"year": 2024, "month": 7}).json()
    assert Decimal(flow["net"]) == Decimal("3300")

    net_worth = client.get("/v1/reports/net-worth").json()
    assert Decimal(net_worth["net_worth"]) == Decimal("8000")
    assert net_worth["debts"][0]["percentage"] == pytest.approx(100 / 3)


# Insights


def test_savings_opportunities_built_from_records(client: TestClient):
    fake = FakeInsightClient()
    use_insight_client(client, fake)
    add_transactions(client, expense("2024-07-03", "45", category="Dining Out", description="Dinner"))
    client.post("/v1/assets", json={"name": "Savings", "type": "bank", "value": "15000"})

    response = client.post("/v1/insights/savings-opportunities", json={})

    assert response.status_code == 200
    assert response.json()["opportunities"][0]["potential_savings"] == "$40/month"
    _, history, assets = fake.calls[0]
    assert "Dining Out: $45.00 - Dinner" in history
    assert assets == "Savings (Bank Account): $15,000.00"


def test_health_score_uses_supplied_summaries(client: TestClient):
    fake = FakeInsightClient()
    use_insight_client(client, fake)

    response = client.post(
        "/v1/insights/health-score",
        json={
            "average_monthly_income": "5000",
            "average_monthly_expenses": "3200",
            "asset_summary": "Savings: $1,000.00",
            "debt_summary": "",
        },
    )

    assert response.status_code == 200
    assert response.json()["score"] == 710
    assert fake.calls[0][1:3] == ("Savings: $1,000.00", "")


def test_health_score_requires_positive_income(client: TestClient):
    use_insight_client(client, FakeInsightClient())
    response = client.post(
        "/v1/insights/health-score", json={"average_monthly_income": "0", "average_monthly_expenses": "10"}
    )
    assert response.status_code == 422


def test_insights_unconfigured_returns_503(client: TestClient):
    use_insight_client(client, FakeInsightClient(InsightNotConfiguredError("no key")))

    response = client.post("/v1/insights/savings-opportunities", json={})

    assert response.status_code == 503
    assert response.json()["detail"] == "Insight service not configured"


def test_insights_invalid_response_returns_502(client: TestClient):
    use_insight_client(client, FakeInsightClient(InvalidInsightResponseError("bad json")))

    response = client.post(
        "/v1/insights/health-score", json={"average_monthly_income": "5000", "average_monthly_expenses": "3200"}
    )

    assert response.status_code == 502


# Money precision and replacement sets


@pytest.mark.parametrize(
    "path,payload",
    [
        ("/v1/transactions/batch", {"transactions": [expense("2024-07-03", "0.005")]}),
        ("/v1/budgets", {"name": "Food", "amount": "100.001", "category": "Groceries", "period": "monthly"}),
        ("/v1/assets", {"name": "Savings", "type": "bank", "value": "10.999"}),
        ("/v1/debts", {"name": "Card", "total_amount": "100", "amount_paid": "0.125"}),
        ("/v1/goals", {"name": "Trip", "target_amount": "1000000000000000", "current_amount": "0"}),
    ],
)
def test_money_beyond_cents_rejected(client: TestClient, path: str, payload: dict):
    assert client.post(path, json=payload).status_code == 422


def test_budget_sum_matches_stored_cents(client: TestClient):
    add_transactions(client, expense("2024-07-05", "40.10"), expense("2024-07-20", "59.95"))
    client.post("/v1/budgets", json={"name": "Food", "amount": "100", "category": "Groceries", "period": "monthly"})

    progress = budget_progress_for(client, "Food", "2024-07-15")

    assert Decimal(progress["spent_amount"]) == Decimal("100.05")
    assert progress["overspent"] is True


def test_replace_all_duplicate_ids_rejected(client: TestClient):
    client.put(
        "/v1/budgets",
        json=[{"id": "food", "name": "Food", "amount": "400", "category": "Groceries", "period": "monthly"}],
    )

    response = client.put(
        "/v1/budgets",
        json=[
            {"id": "dup", "name": "One", "amount": "10", "category": "Groceries", "period": "monthly"},
            {"id": "dup", "name": "Two", "amount": "20", "category": "Transport", "period": "weekly"},
        ],
    )

    assert response.status_code == 422
    assert "dup" in response.json()["detail"]
    assert [b["id"] for b in client.get("/v1/budgets").json()] == ["food"]


@pytest.mark.parametrize(
    "path,item",
    [
        ("/v1/transactions", expense("2024-07-03", "5")),
        ("/v1/debts", {"name": "Card", "total_amount": "100"}),
        ("/v1/goals", {"name": "Trip", "target_amount": "100"}),
    ],
)
def test_replace_all_duplicate_ids_rejected_for_every_registry(client: TestClient, path: str, item: dict):
    response = client.put(path, json=[{**item, "id": "same"}, {**item, "id": "same"}])
    assert response.status_code == 422


def test_not_found_logged_with_request_id(client: TestClient, caplog):
    response = client.delete("/v1/budgets/missing", headers={"X-Request-ID": "req-missing-budget"})

    assert response.status_code == 404
    assert any(getattr(r, "request_id", None) == "req-missing-budget" for r in caplog.records)
