"""
Test suite for the HTTP routes.

The database dependency is replaced by the recording fake connection,
so these tests cover request parsing, response shapes and the mapping
of repository errors onto status codes.
"""
from decimal import Decimal

from jobly.core import database
from jobly.core.config import settings
from tests.conftest import C1, C2, C3, J1, J1_ROW, J2_ROW, J3_ROW


class TestCompanyRoutes:
    """Tests for /companies"""

    def test_create(self, client, fake_db):
        fake_db.queue([], [C1])

        response = client.post("/companies", json=C1)

        assert response.status_code == 201
        assert response.json() == {"company": C1}

    def test_create_duplicate(self, client, fake_db):
        fake_db.queue([{"handle": "c1"}])

        response = client.post("/companies", json=C1)

        assert response.status_code == 400
        assert response.json()["error"] == "DUPLICATE_COMPANY"

    def test_create_missing_data(self, client, fake_db):
        response = client.post("/companies", json={"handle": "new"})

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
        assert fake_db.calls == []

    def test_create_invalid_data(self, client, fake_db):
        response = client.post("/companies", json={**C1, "logoUrl": "not-a-url"})

        assert response.status_code == 400

    def test_list(self, client, fake_db):
        fake_db.queue([C1, C2, C3])

        response = client.get("/companies")

        assert response.status_code == 200
        assert response.json() == {"companies": [C1, C2, C3]}

    def test_list_with_filters(self, client, fake_db):
        fake_db.queue([C2])

        response = client.get("/companies?nameLike=c&minEmployees=2&maxEmployees=2")

        assert response.json() == {"companies": [C2]}
        assert fake_db.calls[0][1] == ("%c%", 2, 2)

    def test_list_ignores_unknown_keys(self, client, fake_db):
        fake_db.queue([C1, C2, C3])

        response = client.get("/companies?description=ccs")

        assert response.json() == {"companies": [C1, C2, C3]}
        assert "WHERE" not in fake_db.statements[0]

    def test_list_invalid_filters(self, client, fake_db):
        for query in (
            "minEmployees=aa",
            "maxEmployees=aa",
            "minEmployees=2&maxEmployees=1",
            "minEmployees=99999999999",
        ):
            response = client.get(f"/companies?{query}")
            assert response.status_code == 400, query
        assert fake_db.calls == []

    def test_get(self, client, fake_db):
        fake_db.queue([{**C1, **J1_ROW}])

        response = client.get("/companies/c1")

        assert response.status_code == 200
        assert response.json() == {"company": {**C1, "jobs": [J1]}}

    def test_get_not_found(self, client, fake_db):
        response = client.get("/companies/nope")

        assert response.status_code == 404
        assert response.json()["message"] == "No company: nope"

    def test_update(self, client, fake_db):
        fake_db.queue([{**C1, "name": "C1-new"}])

        response = client.patch("/companies/c1", json={"name": "C1-new"})

        assert response.status_code == 200
        assert response.json() == {"company": {**C1, "name": "C1-new"}}
        assert fake_db.calls[0][1] == ("C1-new", "c1")

    def test_update_null_clears_field(self, client, fake_db):
        fake_db.queue([{**C1, "logoUrl": None}])

        client.patch("/companies/c1", json={"logoUrl": None})

        sql, params = fake_db.calls[0]
        assert '"logo_url"=$1' in sql
        assert params == (None, "c1")

    def test_update_null_required_field(self, client, fake_db):
        for body in ({"name": None}, {"description": None}):
            response = client.patch("/companies/c1", json=body)
            assert response.status_code == 400, body
        assert fake_db.calls == []

    def test_update_handle_change(self, client, fake_db):
        response = client.patch("/companies/c1", json={"handle": "c1-new"})

        assert response.status_code == 400
        assert fake_db.calls == []

    def test_update_empty(self, client, fake_db):
        response = client.patch("/companies/c1", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "No data"

    def test_update_not_found(self, client, fake_db):
        response = client.patch("/companies/nope", json={"name": "new nope"})

        assert response.status_code == 404

    def test_delete(self, client, fake_db):
        fake_db.queue([{"handle": "c1"}])

        response = client.delete("/companies/c1")

        assert response.json() == {"deleted": "c1"}

    def test_delete_not_found(self, client, fake_db):
        response = client.delete("/companies/nope")

        assert response.status_code == 404


class TestJobRoutes:
    """Tests for /jobs"""

    def test_create(self, client, fake_db):
        fake_db.queue(
            [{"handle": "c1"}],
            [{"id": 4, "title": "J-new", "salary": 10, "equity": Decimal("0.2"), "companyHandle": "c1"}],
        )

        response = client.post(
            "/jobs",
            json={"title": "J-new", "salary": 10, "equity": 0.2, "companyHandle": "c1"},
        )

        assert response.status_code == 201
        assert response.json() == {
            "job": {"id": 4, "title": "J-new", "salary": 10, "equity": "0.2", "companyHandle": "c1"},
        }
        assert fake_db.calls[1][1] == ("J-new", 10, Decimal("0.2"), "c1")

    def test_create_unknown_company(self, client, fake_db):
        response = client.post("/jobs", json={"title": "J", "companyHandle": "nope"})

        assert response.status_code == 400
        assert response.json()["error"] == "COMPANY_NOT_EXISTS"

    def test_create_invalid_equity(self, client, fake_db):
        response = client.post(
            "/jobs", json={"title": "J", "equity": 1.5, "companyHandle": "c1"}
        )

        assert response.status_code == 400
        assert fake_db.calls == []

    def test_create_null_equity(self, client, fake_db):
        response = client.post(
            "/jobs", json={"title": "J", "equity": None, "companyHandle": "c1"}
        )

        assert response.status_code == 400
        assert fake_db.calls == []

    def test_list_with_filters(self, client, fake_db):
        fake_db.queue([J3_ROW])

        response = client.get("/jobs?titleLike=3&minSalary=200000&hasEquity=true")

        assert response.status_code == 200
        assert [job["id"] for job in response.json()["jobs"]] == [3]
        assert fake_db.calls[0][1] == ("%3%", 200000, Decimal("0"))

    def test_list_has_equity_false(self, client, fake_db):
        fake_db.queue([J1_ROW, J2_ROW, J3_ROW])

        response = client.get("/jobs?hasEquity=false")

        assert len(response.json()["jobs"]) == 3
        assert "WHERE 1 = 1" in fake_db.statements[0]

    def test_list_invalid_min_salary(self, client, fake_db):
        response = client.get("/jobs?minSalary=lots")

        assert response.status_code == 400

    def test_get(self, client, fake_db):
        fake_db.queue([{"id": 1, "title": "j1", "salary": 100000, "equity": Decimal("0"), **C1}])

        response = client.get("/jobs/1")

        assert response.json() == {
            "job": {"id": 1, "title": "j1", "salary": 100000, "equity": "0", "company": C1},
        }

    def test_get_not_found(self, client, fake_db):
        response = client.get("/jobs/0")

        assert response.status_code == 404

    def test_get_bad_id(self, client, fake_db):
        response = client.get("/jobs/abc")

        assert response.status_code == 400

    def test_update(self, client, fake_db):
        fake_db.queue([{**J1_ROW, "title": "New"}])

        response = client.patch("/jobs/1", json={"title": "New"})

        assert response.json() == {"job": {**J1, "title": "New"}}

    def test_update_null_title(self, client, fake_db):
        response = client.patch("/jobs/1", json={"title": None})

        assert response.status_code == 400
        assert fake_db.calls == []

    def test_update_null_salary_clears_it(self, client, fake_db):
        fake_db.queue([{**J1_ROW, "salary": None}])

        response = client.patch("/jobs/1", json={"salary": None})

        assert response.status_code == 200
        assert fake_db.calls[0][1] == (None, 1)

    def test_update_company_handle(self, client, fake_db):
        response = client.patch("/jobs/1", json={"companyHandle": "c2"})

        assert response.status_code == 400
        assert fake_db.calls == []

    def test_delete(self, client, fake_db):
        fake_db.queue([{"id": 1}])

        response = client.delete("/jobs/1")

        assert response.json() == {"deleted": 1}

    def test_delete_not_found(self, client, fake_db):
        response = client.delete("/jobs/0")

        assert response.status_code == 404


class TestHealth:

    def test_healthy(self, client, monkeypatch):
        async def ping():
            return None

        monkeypatch.setattr(database, "ping_db", ping)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["checks"] == {"database": "healthy"}

    def test_database_down_is_degraded(self, client, monkeypatch):
        async def ping():
            raise ConnectionRefusedError("connection refused")

        monkeypatch.setattr(database, "ping_db", ping)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["checks"]["database"].startswith("unhealthy")


class TestErrors:

    def test_storage_failure_is_500(self, client, fake_db, monkeypatch):
        monkeypatch.setattr(settings, "debug", False)
        fake_db.queue(RuntimeError('relation "companies" does not exist'))

        response = client.get("/companies")

        assert response.status_code == 500
        assert response.json() == {
            "error": "internal_error",
            "message": "An unexpected error occurred",
        }
