import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.deps import get_reference_data
from app.main import app
from app.services.catalog import SpeciesCatalog
from app.services.families import FamilyRegistry
from app.services.frost import StationRegistry
from app.services.maintenance import MaintenanceRegistry
from app.services.reference_data import ReferenceData, load_reference_data
from tests.factories import FAMILIES, MAINTENANCE, PLANTS, STATIONS


@pytest.fixture
def reference() -> ReferenceData:
    return ReferenceData(
        catalog=SpeciesCatalog.from_definitions(PLANTS),
        families=FamilyRegistry.from_definitions(FAMILIES),
        maintenance=MaintenanceRegistry.from_definitions(MAINTENANCE),
        stations=StationRegistry.from_definitions(STATIONS),
    )


@pytest.fixture
def stations(reference: ReferenceData) -> StationRegistry:
    return reference.stations


@pytest.fixture(scope="session")
def bundled_reference() -> ReferenceData:
    return load_reference_data()


@pytest_asyncio.fixture
async def client(reference: ReferenceData):
    app.dependency_overrides[get_reference_data] = lambda: reference

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
