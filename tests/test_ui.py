import io

from tests.factories import ContactFactory


def test_dashboard_renders_contacts(client, services):
    ContactFactory(email="ann@acme.com", company_name="Acme Corp")
    services.contact_list.refresh()
    response = client.get("/")
    assert response.status_code == 200
    assert b"ann@acme.com" in response.data
    assert b"Total Contacts" in response.data


def test_add_form_shows_validation_error(client):
    response = client.post("/contacts/add", data={"email": "ann@acme.com"})
    assert response.status_code == 400
    assert b"are required" in response.data


def test_add_form_redirects_and_refreshes(client, services):
    response = client.post("/contacts/add", data={
        "email": "ann@acme.com", "company_name": "Acme Corp",
        "industry": "University", "state": "CA", "status": "Valid",
    })
    assert response.status_code == 302
    assert services.contact_list.refresh_trigger == 1
    assert [r.email for r in services.contact_list.rows] == ["ann@acme.com"]


def test_edit_form_prefilled(client):
    contact = ContactFactory(email="bob@other.com")
    response = client.get(f"/contacts/{contact.id}/edit")
    assert response.status_code == 200
    assert b"bob@other.com" in response.data


def test_mapping_page_redirects_without_upload(client):
    response = client.get("/import/mapping")
    assert response.status_code == 302


def test_upload_then_mapping_page(client):
    raw = b"Email,Company\na@acme.com,Acme\n"
    response = client.post("/import", data={"csv_file": (io.BytesIO(raw), "leads.csv")},
                           content_type="multipart/form-data")
    assert response.status_code == 302
    page = client.get("/import/mapping")
    assert page.status_code == 200
    assert b"Ready to import" in page.data
    assert b"Import 1 Contacts" in page.data


def test_upload_rejects_non_csv(client):
    response = client.post("/import", data={"csv_file": (io.BytesIO(b"x"), "leads.txt")},
                           content_type="multipart/form-data")
    assert response.status_code == 400
    assert b"Please upload a CSV file" in response.data
