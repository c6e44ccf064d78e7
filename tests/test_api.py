def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_login_success_omits_password(client):
    resp = client.post("/login", json={"email": "doctor@dentalcare.com", "password": "doctor123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["token"]
    assert body["user"]["role"] == "doctor"
    assert "password" not in body["user"]
    assert "password_hash" not in body["user"]


def test_login_errors(client):
    resp = client.post("/login", json={"email": "doctor@dentalcare.com"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Email and password are required"}

    resp = client.post("/login", json={"email": "doctor@dentalcare.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid email or password"}


def test_current_user(client, patient_headers):
    resp = client.get("/users/me", headers=patient_headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "bob.doe@email.com"
    assert resp.json()["dateOfBirth"] == "1985-04-12"


def test_requires_authentication(client):
    assert client.get("/appointments").status_code == 401
    resp = client.get("/appointments", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401


def test_appointment_types(client):
    resp = client.get("/appointmentTypes")
    assert resp.status_code == 200
    assert resp.json()[0] == {"id": 1, "name": "Check-up", "durationMinutes": 30}
    assert client.get("/appointmentTypes/3").json()["durationMinutes"] == 60
    resp = client.get("/appointmentTypes/99")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Appointment type not found"}


def test_availability_accepted(client):
    resp = client.post("/appointments/availability", json={"doctorId": 1, "date": "2024-01-08T11:00:00Z", "typeId": 1})
    assert resp.status_code == 200
    assert resp.json() == {"available": True}


def test_availability_conflict(client):
    # Seeded: doctor 1 has a scheduled 30 minute check-up at 2024-01-08 09:00
    resp = client.post("/appointments/availability", json={"doctorId": 1, "date": "2024-01-08T09:15", "typeId": 1})
    assert resp.status_code == 409
    body = resp.json()
    assert body["error"]
    assert body["conflicts"] == [{"date": "2024-01-08T09:00:00", "type": 1}]


def test_availability_back_to_back_is_free(client):
    resp = client.post("/appointments/availability", json={"doctorId": 1, "date": "2024-01-08T09:30", "typeId": 1})
    assert resp.status_code == 200


def test_availability_ignores_cancelled(client):
    # Seeded cancelled cleaning on 2024-01-09 11:00
    resp = client.post("/appointments/availability", json={"doctorId": 1, "date": "2024-01-09T11:00", "typeId": 2})
    assert resp.status_code == 200


def test_availability_validation_errors(client):
    cases = [
        ({"date": "2024-01-08T11:00", "typeId": 1}, "Missing required fields"),
        ({"doctorId": 1, "date": "2024-01-08T15:00", "typeId": 1}, "between 9:00 AM and 3:00 PM"),
        ({"doctorId": 1, "date": "2024-01-06T10:00", "typeId": 1}, "Monday through Friday"),
        ({"doctorId": 1, "date": "2024-01-08T11:00", "typeId": 99}, "Invalid appointment type"),
        ({"doctorId": 1, "date": "tomorrow", "typeId": 1}, "Invalid date format"),
    ]
    for payload, message in cases:
        resp = client.post("/appointments/availability", json=payload)
        assert resp.status_code == 400, payload
        assert message in resp.json()["error"]
        assert "conflicts" not in resp.json()


def test_availability_malformed_field_is_400(client):
    resp = client.post("/appointments/availability", json={"doctorId": "abc", "date": "2024-01-08T11:00", "typeId": 1})
    assert resp.status_code == 400
    assert "doctorId" in resp.json()["error"]


def test_book_list_and_cancel(client, patient_headers, other_patient_headers):
    resp = client.post("/appointments", json={"date": "2024-01-10T13:00:00Z", "type": 2}, headers=patient_headers)
    assert resp.status_code == 201, resp.text
    appt = resp.json()
    assert appt["status"] == "pending"
    assert appt["patientId"] == 2
    assert appt["doctorId"] == 1
    assert appt["date"] == "2024-01-10T13:00:00"

    listed = client.get("/appointments", headers=patient_headers).json()
    assert appt["id"] in [a["id"] for a in listed]
    assert all(a["patientId"] == 2 for a in listed)

    assert client.get(f"/appointments/{appt['id']}", headers=other_patient_headers).status_code == 404

    resp = client.put(f"/appointments/{appt['id']}/cancel", headers=patient_headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelled"

    resp = client.put(f"/appointments/{appt['id']}/cancel", headers=patient_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "This appointment has already been cancelled"}


def test_booking_conflict_returns_409(client, other_patient_headers):
    resp = client.post("/appointments", json={"date": "2024-01-08T10:30:00", "type": 1}, headers=other_patient_headers)
    assert resp.status_code == 409
    assert resp.json()["conflicts"] == [{"date": "2024-01-08T10:00:00", "type": 3}]


def test_doctor_status_flow(client, doctor_headers, patient_headers):
    # Seeded appointment 2 is pending with doctor 1
    resp = client.patch("/appointments/2/status", json={"status": "scheduled"}, headers=doctor_headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "scheduled"

    resp = client.patch("/appointments/2/status", json={"status": "completed"}, headers=doctor_headers)
    assert resp.json()["status"] == "completed"

    resp = client.patch("/appointments/1/status", json={"status": "completed"}, headers=patient_headers)
    assert resp.status_code == 403

    resp = client.patch("/appointments/2/status", json={"status": "pending"}, headers=doctor_headers)
    assert resp.status_code == 400

    doctor_list = client.get("/appointments", params={"status": "completed"}, headers=doctor_headers).json()
    assert [a["id"] for a in doctor_list] == [2]


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/nothing-here")
    assert resp.status_code == 404
    assert "error" in resp.json()


def test_oversized_ids_are_rejected_as_validation_errors(client, patient_headers):
    too_big = 2**70
    resp = client.post("/appointments/availability", json={"doctorId": too_big, "date": "2024-01-08T11:00", "typeId": 1})
    assert resp.status_code == 400
    assert "doctorId" in resp.json()["error"]

    resp = client.post("/appointments/availability", json={"doctorId": 1, "date": "2024-01-08T11:00", "typeId": too_big})
    assert resp.status_code == 400

    resp = client.post("/appointments", json={"date": "2024-01-10T13:00:00", "type": 1, "doctorId": too_big}, headers=patient_headers)
    assert resp.status_code == 400

    assert client.get(f"/appointments/{too_big}", headers=patient_headers).status_code == 400
    assert client.get(f"/appointmentTypes/{too_big}").status_code == 400


def test_booking_without_type_names_no_wire_field(client, patient_headers):
    resp = client.post("/appointments", json={"date": "2024-01-10T13:00:00"}, headers=patient_headers)
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error.startswith("Missing required fields")
    assert "typeId" not in error and "doctorId" not in error


def test_stored_dates_are_naive(client):
    from sqlmodel import Session, select
    from dentalcare.database import engine
    from dentalcare.db.models import Appointment, User

    assert Appointment.__table__.c.date.type.timezone is False
    with Session(engine) as session:
        appt = session.exec(select(Appointment).where(Appointment.id == 1)).one()
        assert appt.date.tzinfo is None
        assert appt.created_at.tzinfo is None
        assert session.exec(select(User)).first().created_at.tzinfo is None


def test_schemas_export_only_wire_models():
    import dentalcare.schemas as schemas

    assert "MessageResponse" not in schemas.__all__
    assert not hasattr(schemas, "MessageResponse")
    for name in schemas.__all__:
        assert hasattr(schemas, name)
