"""End-to-end tests for the HTTP API against the seeded demo data."""

from decimal import Decimal

from bizbooks.core.config import settings
from bizbooks.infrastructure.db.repositories import ClientRepository, StorageError


def _login(client, email, password="demo123"):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})


def _d(value) -> Decimal:
    # money is serialised as a JSON string
    return Decimal(str(value))


NEW_INVOICE = {
    "invoice_number": "MDE/2025/002",
    "firm_id": "1",
    "client_id": "3",
    "invoice_date": "2025-01-18",
    "description": "Pump repair",
    "sac_code": "9987",
    "unit": "Job",
    "rate": 1000,
    "quantity": 2,
    "gst_rate": 18,
    "extra_charges": 100,
    "extra_deductions": 50,
}


class TestHealth:

    def test_root(self, api_client):
        resp = api_client.get("/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestAuth:

    def test_wrong_password(self, api_client):
        resp = _login(api_client, "jogendra@email.com", "nope")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid credentials"

    def test_unknown_email(self, api_client):
        assert _login(api_client, "nobody@email.com").status_code == 401

    def test_login_and_me(self, api_client):
        resp = _login(api_client, "jogendra@email.com")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["token_type"] == "bearer"
        assert data["user"]["role"] == "admin"

        me = api_client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
        assert me.status_code == 200
        assert me.json()["data"]["email"] == "jogendra@email.com"

    def test_me_requires_token(self, api_client):
        assert api_client.get("/api/v1/auth/me").status_code == 401
        bad = api_client.get("/api/v1/auth/me", headers={"Authorization": "Bearer junk"})
        assert bad.status_code == 401


class TestCalculate:

    def test_demo_totals(self, api_client, admin_headers):
        resp = api_client.post(
            "/api/v1/invoices/calculate",
            json={"rate": 2000, "quantity": 88.9, "gst_rate": 18},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert _d(data["taxable_amount"]) == Decimal("177800")
        assert _d(data["cgst_amount"]) == Decimal("16002")
        assert _d(data["sgst_amount"]) == Decimal("16002")
        assert _d(data["igst_amount"]) == Decimal("0")
        assert _d(data["grand_total"]) == Decimal("209804")
        assert data["display"]["grand_total"] == "₹2,09,804"

    def test_garbage_counts_as_zero(self, api_client, admin_headers):
        resp = api_client.post(
            "/api/v1/invoices/calculate",
            json={"rate": "abc", "quantity": -3, "gst_rate": None, "extra_charges": "250"},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        assert _d(resp.json()["data"]["grand_total"]) == Decimal("250")


class TestInvoices:

    def test_admin_sees_all(self, api_client, admin_headers):
        data = api_client.get("/api/v1/invoices", headers=admin_headers).json()["data"]
        assert data["total"] == 2
        assert data["has_more"] is False

    def test_restricted_user_sees_own_firms_only(self, api_client, assistant_headers):
        data = api_client.get("/api/v1/invoices", headers=assistant_headers).json()["data"]
        assert data["total"] == 1
        item = data["items"][0]
        assert item["firm_name"] == "MAA DURGA ENGINEERING"
        assert item["client_name"] == "U.K. ENTERPRISES"

    def test_other_firms_invoice_is_not_found(self, api_client, assistant_headers):
        assert api_client.get("/api/v1/invoices/2", headers=assistant_headers).status_code == 404
        assert api_client.delete("/api/v1/invoices/2", headers=assistant_headers).status_code == 404

    def test_filters(self, api_client, admin_headers):
        paid = api_client.get("/api/v1/invoices", params={"status": "paid"}, headers=admin_headers).json()["data"]
        assert [i["invoice_number"] for i in paid["items"]] == ["JM/2025/001"]

        found = api_client.get("/api/v1/invoices", params={"search": "balaji"}, headers=admin_headers).json()["data"]
        assert found["total"] == 1

        bad = api_client.get("/api/v1/invoices", params={"status": "overdue"}, headers=admin_headers)
        assert bad.status_code == 422

    def test_pagination(self, api_client, admin_headers):
        page = api_client.get("/api/v1/invoices", params={"limit": 1}, headers=admin_headers).json()["data"]
        assert len(page["items"]) == 1
        assert page["has_more"] is True
        assert api_client.get("/api/v1/invoices", params={"limit": 0}, headers=admin_headers).status_code == 422

    def test_create_computes_totals(self, api_client, admin_headers):
        resp = api_client.post("/api/v1/invoices", json=NEW_INVOICE, headers=admin_headers)
        assert resp.status_code == 201
        inv = resp.json()["data"]
        assert _d(inv["total_amount"]) == Decimal("2050")
        assert _d(inv["cgst_amount"]) == Decimal("184.5")
        assert _d(inv["grand_total"]) == Decimal("2419")
        assert inv["payment_status"] == "pending"
        assert _d(inv["pending_amount"]) == _d(inv["grand_total"])
        assert inv["client_name"] == "MODERN BUILDERS"

    def test_create_for_inaccessible_firm(self, api_client, assistant_headers):
        resp = api_client.post("/api/v1/invoices", json={**NEW_INVOICE, "firm_id": "2"}, headers=assistant_headers)
        assert resp.status_code == 403

    def test_create_rejects_unknown_firm_and_client(self, api_client, admin_headers):
        assert api_client.post(
            "/api/v1/invoices", json={**NEW_INVOICE, "firm_id": "99"}, headers=admin_headers
        ).status_code == 404
        assert api_client.post(
            "/api/v1/invoices", json={**NEW_INVOICE, "client_id": "99"}, headers=admin_headers
        ).status_code == 404

    def test_create_rejects_unlisted_gst_rate(self, api_client, admin_headers):
        resp = api_client.post("/api/v1/invoices", json={**NEW_INVOICE, "gst_rate": 7}, headers=admin_headers)
        assert resp.status_code == 422

    def test_update_recomputes(self, api_client, admin_headers):
        resp = api_client.put("/api/v1/invoices/1", json={"quantity": 10}, headers=admin_headers)
        assert resp.status_code == 200
        inv = resp.json()["data"]
        assert _d(inv["total_amount"]) == Decimal("20000")
        assert _d(inv["grand_total"]) == Decimal("23600")
        assert _d(inv["pending_amount"]) == Decimal("23600")

    def test_record_payment(self, api_client, admin_headers):
        resp = api_client.post("/api/v1/invoices/1/payments", json={"amount": 9804}, headers=admin_headers)
        assert resp.status_code == 200
        inv = resp.json()["data"]
        assert inv["payment_status"] == "partial"
        assert inv["payment_status_label"] == "Partially Paid"
        assert _d(inv["pending_amount"]) == Decimal("200000")

        assert api_client.post(
            "/api/v1/invoices/1/payments", json={"amount": 0}, headers=admin_headers
        ).status_code == 422

    def test_description_edit_keeps_totals(self, api_client, admin_headers):
        body = {**NEW_INVOICE, "rate": "0.125", "quantity": 1000, "gst_rate": 0, "extra_charges": 0, "extra_deductions": 0}
        created = api_client.post("/api/v1/invoices", json=body, headers=admin_headers).json()["data"]
        assert _d(created["rate"]) == Decimal("0.13")
        assert _d(created["grand_total"]) == Decimal("130")

        resp = api_client.put(f"/api/v1/invoices/{created['id']}", json={"description": "typo fix"}, headers=admin_headers)
        assert resp.status_code == 200
        inv = resp.json()["data"]
        assert inv["description"] == "typo fix"
        assert _d(inv["grand_total"]) == Decimal("130")
        assert _d(inv["pending_amount"]) == Decimal("130")

    def test_update_rejects_null_for_required_fields(self, api_client, admin_headers):
        for field in ("invoice_number", "client_id", "description", "rate", "quantity", "gst_rate"):
            resp = api_client.put("/api/v1/invoices/1", json={field: None}, headers=admin_headers)
            assert resp.status_code == 422, field

        inv = api_client.get("/api/v1/invoices/1", headers=admin_headers).json()["data"]
        assert inv["invoice_number"] == "KDJ/LHR/24-25/19"
        assert _d(inv["grand_total"]) == Decimal("209804")

        resp = api_client.put("/api/v1/invoices/1", json={"sac_code": None}, headers=admin_headers)
        assert resp.status_code == 200

    def test_lowering_total_after_full_payment(self, api_client, admin_headers):
        api_client.post("/api/v1/invoices/1/payments", json={"amount": 209804}, headers=admin_headers)

        resp = api_client.put("/api/v1/invoices/1", json={"quantity": 1}, headers=admin_headers)
        assert resp.status_code == 200
        inv = resp.json()["data"]
        assert _d(inv["grand_total"]) == Decimal("2360")
        assert _d(inv["pending_amount"]) == Decimal("0")
        assert inv["payment_status"] == "paid"

    def test_delete(self, api_client, admin_headers):
        assert api_client.delete("/api/v1/invoices/1", headers=admin_headers).status_code == 200
        assert api_client.get("/api/v1/invoices/1", headers=admin_headers).status_code == 404

    def test_pdf_download(self, api_client, admin_headers):
        resp = api_client.get("/api/v1/invoices/1/pdf", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert "invoice_KDJ-LHR-24-25-19.pdf" in resp.headers["content-disposition"]
        assert resp.content.startswith(b"%PDF")

    def test_deleted_firm_shows_as_unknown(self, api_client, admin_headers):
        assert api_client.delete("/api/v1/firms/2", headers=admin_headers).status_code == 200
        inv = api_client.get("/api/v1/invoices/2", headers=admin_headers).json()["data"]
        assert inv["firm_name"] == "Unknown Firm"


class TestFirms:

    def test_list_respects_access(self, api_client, admin_headers, assistant_headers):
        assert api_client.get("/api/v1/firms", headers=admin_headers).json()["data"]["total"] == 2
        firms = api_client.get("/api/v1/firms", headers=assistant_headers).json()["data"]["items"]
        assert [f["id"] for f in firms] == ["1"]
        assert firms[0]["gst_registered"] is True

    def test_only_admins_create(self, api_client, admin_headers, assistant_headers):
        body = {
            "name": "NEW FIRM",
            "proprietor": "Someone",
            "description": "Electrical works",
            "phone": "9000000000",
            "permanent_address": "Keonjhar, Odisha",
        }
        assert api_client.post("/api/v1/firms", json=body, headers=assistant_headers).status_code == 403
        resp = api_client.post("/api/v1/firms", json=body, headers=admin_headers)
        assert resp.status_code == 201
        assert resp.json()["data"]["gst_registered"] is False

    def test_create_requires_fields(self, api_client, admin_headers):
        assert api_client.post("/api/v1/firms", json={"name": "X"}, headers=admin_headers).status_code == 422

    def test_hidden_firm_is_not_found(self, api_client, assistant_headers):
        assert api_client.get("/api/v1/firms/2", headers=assistant_headers).status_code == 404
        resp = api_client.put("/api/v1/firms/2", json={"name": "Mine now"}, headers=assistant_headers)
        assert resp.status_code == 404

    def test_update_rejects_null_for_required_fields(self, api_client, admin_headers):
        for field in ("name", "proprietor", "letterhead_type"):
            resp = api_client.put("/api/v1/firms/1", json={field: None}, headers=admin_headers)
            assert resp.status_code == 422, field
        assert api_client.get("/api/v1/firms/1", headers=admin_headers).json()["data"]["name"] == "MAA DURGA ENGINEERING"

        resp = api_client.put("/api/v1/firms/1", json={"present_address": None}, headers=admin_headers)
        assert resp.status_code == 200


class TestClients:

    def test_everyone_sees_all_clients(self, api_client, assistant_headers):
        assert api_client.get("/api/v1/clients", headers=assistant_headers).json()["data"]["total"] == 3

    def test_search_by_phone(self, api_client, admin_headers):
        data = api_client.get("/api/v1/clients", params={"search": "98765"}, headers=admin_headers).json()["data"]
        assert [c["name"] for c in data["items"]] == ["U.K. ENTERPRISES"]

    def test_create_validates(self, api_client, admin_headers):
        body = {
            "name": "NEW CLIENT",
            "phone": "9000000001",
            "email": "new.client@email.com",
            "address": "Cuttack",
            "pincode": "753001",
            "state": "Odisha",
        }
        assert api_client.post("/api/v1/clients", json={**body, "pincode": "75300"}, headers=admin_headers).status_code == 422
        assert api_client.post("/api/v1/clients", json={**body, "state": "Atlantis"}, headers=admin_headers).status_code == 422
        assert api_client.post("/api/v1/clients", json={**body, "email": "not-an-email"}, headers=admin_headers).status_code == 422
        assert api_client.post("/api/v1/clients", json=body, headers=admin_headers).status_code == 201

    def test_update_rejects_null_name(self, api_client, admin_headers):
        resp = api_client.put("/api/v1/clients/1", json={"name": None}, headers=admin_headers)
        assert resp.status_code == 422
        assert api_client.put("/api/v1/clients/1", json={"state": None}, headers=admin_headers).status_code == 200

    def test_storage_failure_returns_generic_error(self, api_client, admin_headers, monkeypatch):
        async def _fail(self, **fields):
            raise StorageError("Could not create clients record")

        monkeypatch.setattr(ClientRepository, "create", _fail)
        body = {
            "name": "NEW CLIENT",
            "phone": "9000000001",
            "email": "new.client@email.com",
            "address": "Cuttack",
            "pincode": "753001",
        }
        resp = api_client.post("/api/v1/clients", json=body, headers=admin_headers)
        assert resp.status_code == 500
        assert resp.json() == {
            "status": "error",
            "data": None,
            "message": "Could not save changes. Please try again.",
            "errors": None,
        }


class TestExpenses:

    def test_list_with_summary(self, api_client, admin_headers):
        data = api_client.get("/api/v1/expenses", headers=admin_headers).json()["data"]
        assert data["total"] == 2
        assert _d(data["summary"]["total_amount"]) == Decimal("17000")
        assert data["summary"]["total_amount_display"] == "₹17,000"
        assert data["items"][0]["firm_name"] == "MAA DURGA ENGINEERING"

    def test_category_filter(self, api_client, admin_headers):
        data = api_client.get("/api/v1/expenses", params={"category": "Fuel"}, headers=admin_headers).json()["data"]
        assert [e["description"] for e in data["items"]] == ["Diesel Payment"]
        assert _d(data["summary"]["total_amount"]) == Decimal("5000")

    def test_unknown_window(self, api_client, admin_headers):
        resp = api_client.get("/api/v1/expenses", params={"window": "decade"}, headers=admin_headers)
        assert resp.status_code == 422

    def test_create_for_inaccessible_firm(self, api_client, assistant_headers):
        body = {"firm_id": "2", "description": "Cement", "amount": 800, "category": "Materials", "date": "2025-01-12"}
        assert api_client.post("/api/v1/expenses", json=body, headers=assistant_headers).status_code == 403

    def test_create_and_update(self, api_client, assistant_headers):
        body = {"firm_id": "1", "description": "Cement", "amount": 800, "category": "Materials", "date": "2025-01-12"}
        resp = api_client.post("/api/v1/expenses", json=body, headers=assistant_headers)
        assert resp.status_code == 201
        expense_id = resp.json()["data"]["id"]

        resp = api_client.put(f"/api/v1/expenses/{expense_id}", json={"amount": 900}, headers=assistant_headers)
        assert resp.status_code == 200
        assert _d(resp.json()["data"]["amount"]) == Decimal("900")

        moved = api_client.put(f"/api/v1/expenses/{expense_id}", json={"firm_id": "2"}, headers=assistant_headers)
        assert moved.status_code == 403

    def test_create_rejects_unknown_category(self, api_client, admin_headers):
        body = {"firm_id": "1", "description": "Snacks", "amount": 80, "category": "Food", "date": "2025-01-12"}
        assert api_client.post("/api/v1/expenses", json=body, headers=admin_headers).status_code == 422

    def test_update_rejects_null_for_required_fields(self, api_client, admin_headers):
        for field in ("description", "amount", "category", "firm_id"):
            resp = api_client.put("/api/v1/expenses/1", json={field: None}, headers=admin_headers)
            assert resp.status_code == 422, field


class TestExpenseAttachments:

    RECEIPT = ("receipt.png", b"\x89PNG\r\n\x1a\nnot-really-an-image", "image/png")

    def test_upload_download_delete(self, api_client, assistant_headers):
        resp = api_client.post(
            "/api/v1/expenses/1/attachments", files={"file": self.RECEIPT}, headers=assistant_headers
        )
        assert resp.status_code == 201
        info = resp.json()["data"]
        assert info["name"] == "receipt.png"
        assert info["size"] == len(self.RECEIPT[1])
        assert info["type"] == "image/png"
        assert "data" not in info

        listed = api_client.get("/api/v1/expenses/1", headers=assistant_headers).json()["data"]["attachments"]
        assert [a["id"] for a in listed] == [info["id"]]
        assert "data" not in listed[0]

        url = f"/api/v1/expenses/1/attachments/{info['id']}"
        download = api_client.get(url, headers=assistant_headers)
        assert download.status_code == 200
        assert download.content == self.RECEIPT[1]
        assert download.headers["content-type"] == "image/png"
        assert 'filename="receipt.png"' in download.headers["content-disposition"]

        assert api_client.delete(url, headers=assistant_headers).status_code == 200
        assert api_client.get(url, headers=assistant_headers).status_code == 404
        assert api_client.get("/api/v1/expenses/1", headers=assistant_headers).json()["data"]["attachments"] == []

    def test_pdf_receipt(self, api_client, admin_headers):
        pdf = ("bill.pdf", b"%PDF-1.4 minimal", "application/pdf")
        resp = api_client.post("/api/v1/expenses/2/attachments", files={"file": pdf}, headers=admin_headers)
        assert resp.status_code == 201
        download = api_client.get(f"/api/v1/expenses/2/attachments/{resp.json()['data']['id']}", headers=admin_headers)
        assert download.content == pdf[1]

    def test_unknown_attachment(self, api_client, admin_headers):
        assert api_client.get("/api/v1/expenses/1/attachments/nope", headers=admin_headers).status_code == 404
        assert api_client.delete("/api/v1/expenses/1/attachments/nope", headers=admin_headers).status_code == 404

    def test_rejects_unsupported_type(self, api_client, admin_headers):
        resp = api_client.post(
            "/api/v1/expenses/1/attachments",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=admin_headers,
        )
        assert resp.status_code == 415

    def test_rejects_oversized_file(self, api_client, admin_headers, monkeypatch):
        monkeypatch.setattr(settings, "MAX_ATTACHMENT_BYTES", 8)
        resp = api_client.post("/api/v1/expenses/1/attachments", files={"file": self.RECEIPT}, headers=admin_headers)
        assert resp.status_code == 413

    def test_other_firms_expense_is_not_found(self, api_client, admin_headers, assistant_headers):
        body = {"firm_id": "2", "description": "Cement", "amount": 800, "category": "Materials", "date": "2025-01-12"}
        expense_id = api_client.post("/api/v1/expenses", json=body, headers=admin_headers).json()["data"]["id"]
        uploaded = api_client.post(
            f"/api/v1/expenses/{expense_id}/attachments", files={"file": self.RECEIPT}, headers=admin_headers
        ).json()["data"]

        resp = api_client.post(
            f"/api/v1/expenses/{expense_id}/attachments", files={"file": self.RECEIPT}, headers=assistant_headers
        )
        assert resp.status_code == 404
        url = f"/api/v1/expenses/{expense_id}/attachments/{uploaded['id']}"
        assert api_client.get(url, headers=assistant_headers).status_code == 404


class TestDashboard:

    def test_admin(self, api_client, admin_headers):
        data = api_client.get("/api/v1/dashboard", headers=admin_headers).json()["data"]
        assert data["total_firms"] == 2
        assert data["total_clients"] == 3
        assert data["total_invoices"] == 2
        assert _d(data["total_revenue"]) == Decimal("259804")
        assert _d(data["pending_amount"]) == Decimal("209804")
        assert _d(data["total_expenses"]) == Decimal("17000")
        assert data["display"]["total_revenue"] == "₹2,59,804"
        assert data["recent_invoices"][0]["invoice_number"] == "JM/2025/001"

    def test_restricted_user(self, api_client, assistant_headers):
        data = api_client.get("/api/v1/dashboard", headers=assistant_headers).json()["data"]
        assert data["total_firms"] == 1
        assert data["total_invoices"] == 1
        assert _d(data["total_revenue"]) == Decimal("209804")


class TestReference:

    def test_lists(self, api_client, admin_headers):
        data = api_client.get("/api/v1/reference", headers=admin_headers).json()["data"]
        assert [r["value"] for r in data["gst_rates"]] == [0, 5, 12, 18, 28]
        assert len(data["indian_states"]) == 36
        assert "Fuel" in data["expense_categories"]
