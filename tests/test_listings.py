"""
Tests for the customer and student listings and the service endpoints
"""

import pytest
from sqlalchemy import text


@pytest.fixture
def seed_customers(pool):
    def _seed(count):
        with pool.engine.connect() as conn:
            for i in range(1, count + 1):
                conn.execute(
                    text(
                        "INSERT INTO customer (CUST_CODE, CUST_NAME, CUST_CITY, WORKING_AREA, CUST_COUNTRY, "
                        "GRADE, OPENING_AMT, RECEIVE_AMT, PAYMENT_AMT, OUTSTANDING_AMT, PHONE_NO, AGENT_CODE) "
                        "VALUES (:code, :name, 'London', 'London', 'UK', 2, 6000, 5000, 7000, 4000, "
                        "'BBBBBBB', 'A003')"
                    ),
                    {"code": f"C{i:05d}", "name": f"Customer {i}"},
                )
    return _seed


@pytest.fixture
def seed_students(pool):
    def _seed(count):
        with pool.engine.connect() as conn:
            for i in range(1, count + 1):
                conn.execute(
                    text("INSERT INTO student (STUDENT_ID, NAME, COURSE) VALUES (:id, :name, 'CS')"),
                    {"id": i, "name": f"Student {i}"},
                )
    return _seed


class TestCustomers:
    """Test cases for GET /customers"""

    def test_rows_returned_verbatim(self, client, seed_customers):
        seed_customers(2)

        response = client.get("/customers")
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 2
        assert data["customers"][0]["CUST_CODE"] == "C00001"
        assert data["customers"][1]["CUST_NAME"] == "Customer 2"
        assert data["customers"][0]["CUST_COUNTRY"] == "UK"

    def test_limited_to_ten(self, client, seed_customers):
        seed_customers(15)

        data = client.get("/customers").json()
        assert data["total"] == 10
        assert len(data["customers"]) == 10

    def test_database_error(self, broken_client, empty_pool):
        response = broken_client.get("/customers")
        assert response.status_code == 500
        assert "customer" in response.json()["error"]
        assert empty_pool.in_use == 0


class TestStudents:
    """Test cases for GET /students"""

    def test_rows_returned_verbatim(self, client, seed_students):
        seed_students(3)

        response = client.get("/students")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert [s["NAME"] for s in data["students"]] == ["Student 1", "Student 2", "Student 3"]

    def test_empty_table(self, client):
        assert client.get("/students").json() == {"total": 0, "students": []}

    def test_database_error(self, broken_client):
        response = broken_client.get("/students")
        assert response.status_code == 500
        assert "error" in response.json()


class TestServiceEndpoints:
    """Root, health and documentation endpoints"""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_openapi_lists_order_routes(self, client):
        paths = client.get("/openapi.json").json()["paths"]
        assert set(paths["/orders"]) == {"get", "post"}
        assert set(paths["/orders/{ORD_NUM}"]) == {"put", "patch", "delete"}
        assert "/customers" in paths
        assert "/students" in paths
