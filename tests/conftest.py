import pytest
import httpx
from carestore.core import db
from carestore.main import app
from carestore.modules.contacts.schemas import ContactCreate
from carestore.modules.contacts.service import ContactService
from carestore.modules.medications.schemas import MedicationCreate
from carestore.modules.medications.service import MedicationService

@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'carestore.db'}"

@pytest.fixture
async def store(db_url):
    db.configure(db_url)
    await db.init_models()
    yield db
    await db.dispose()

@pytest.fixture
async def session(store):
    async with db.SessionLocal() as s:
        yield s

@pytest.fixture
async def client(store):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

@pytest.fixture
async def nurse(session):
    return await ContactService(session).create(
        ContactCreate(name="Dr. A", contact_type="NURSE", phone_number="555-0100")
    )

@pytest.fixture
async def medication(session, nurse):
    return await MedicationService(session).create(
        MedicationCreate(
            name="Ibuprofen", dosage_type="tablet", strength=200, units="mg",
            quantity=30, prescriber_id=nurse.id,
        )
    )
