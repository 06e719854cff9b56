import pytest

from mortgage_calc.advice import FALLBACK_ADVICE
from mortgage_calc_web.app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestIndex:
    def test_get(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert b"The Mortgage Trap" in response.data

    def test_budget_game(self, client):
        response = client.post(
            "/", data={"region": "UK", "budget": "1400", "rate": "4.5", "loan": "250000"}
        )
        assert response.status_code == 200
        page = response.get_data(as_text=True)
        assert "Paid off in" in page
        assert "£" in page
        assert "Month 1 (year 1)" in page

    def test_payment_below_interest(self, client):
        response = client.post(
            "/", data={"region": "USA", "budget": "1400", "rate": "4.5", "loan": "250000", "payment": "900"}
        )
        assert response.status_code == 200
        page = response.get_data(as_text=True)
        assert "never paid off" in page
        assert "The Debt Trap" in page

    def test_invalid_input_shows_error(self, client):
        response = client.post("/", data={"rate": "abc"})
        assert response.status_code == 200
        assert "Invalid interest rate" in response.get_data(as_text=True)

    def test_zero_rate_shows_no_interest_notice(self, client):
        response = client.post(
            "/", data={"region": "UK", "budget": "1000", "rate": "0", "loan": "120000", "payment": "1000"}
        )
        assert response.status_code == 200
        page = response.get_data(as_text=True)
        assert "No interest" in page
        assert "10.0 years" in page
        assert "The Freedom Zone" not in page
        assert "Total cost" not in page


class TestApi:
    def test_simulate(self, client):
        response = client.post(
            "/api/simulate",
            json={"principal": 250_000, "annual_rate_percent": 4.5, "term_years": 25},
        )
        assert response.status_code == 200
        body = response.get_json()
        assert body["months_to_pay_off"] == 300
        assert len(body["schedule"]) == 300
        assert body["mood"] == "meh"

    def test_simulate_accepts_shorthand_amounts(self, client):
        response = client.post(
            "/api/simulate",
            json={"principal": "250k", "annual_rate_percent": 4.5, "term_years": 25, "monthly_overpayment": 200},
        )
        assert response.status_code == 200
        assert response.get_json()["months_to_pay_off"] < 300

    def test_simulate_missing_field(self, client):
        response = client.post("/api/simulate", json={"principal": 250_000})
        assert response.status_code == 400
        assert "annual_rate_percent" in response.get_json()["error"]

    def test_term(self, client):
        response = client.post(
            "/api/term",
            json={"principal": 250_000, "annual_rate_percent": 4.5, "monthly_payment": 1389.13},
        )
        body = response.get_json()
        assert body["years"] == pytest.approx(25.0, abs=0.05)
        assert body["never_pays_off"] is False

    def test_term_never(self, client):
        response = client.post(
            "/api/term",
            json={"principal": 250_000, "annual_rate_percent": 4.5, "monthly_payment": 500},
        )
        assert response.get_json()["never_pays_off"] is True

    def test_affordability(self, client):
        response = client.post("/api/affordability", json={"monthly_budget": 1400, "annual_rate_percent": 4.5})
        max_loan = response.get_json()["max_loan"]
        assert max_loan > 0
        assert max_loan % 1000 == 0

    def test_advice_falls_back_without_key(self, client, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        response = client.post(
            "/api/advice",
            json={"principal": 250_000, "annual_rate_percent": 4.5, "term_years": 25, "monthly_overpayment": 200},
        )
        assert response.status_code == 200
        body = response.get_json()
        assert body["advice"] == FALLBACK_ADVICE
        assert body["summary"]["months_to_pay_off"] == 300

    def test_simulate_caps_very_long_terms(self, client):
        response = client.post(
            "/api/simulate",
            json={"principal": 250_000, "annual_rate_percent": 0.0001, "term_years": 50_000},
        )
        assert response.status_code == 200
        body = response.get_json()
        # 100 years at most, plus the half-again iteration cap
        assert len(body["schedule"]) <= 1800
        assert body["months_to_pay_off"] <= 1800

    def test_simulate_long_term_at_normal_rate(self, client):
        response = client.post(
            "/api/simulate",
            json={"principal": 250_000, "annual_rate_percent": 4.5, "term_years": 20_000},
        )
        assert response.status_code == 200
        assert len(response.get_json()["schedule"]) <= 1800

    def test_advice_caps_very_long_terms(self, client, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        response = client.post(
            "/api/advice",
            json={"principal": 250_000, "annual_rate_percent": 0.0001, "term_years": 50_000},
        )
        assert response.status_code == 200
        assert response.get_json()["summary"]["months_to_pay_off"] <= 1800
