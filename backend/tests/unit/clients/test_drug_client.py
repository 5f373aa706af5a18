import httpx
import pytest

from rxguard.services.drug_client import HttpDrugClient, LookupStatus, MockDrugStore

BASE_URL = "http://drug-db.test"


def _client(handler, timeout=1.0):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return http, HttpDrugClient(http, BASE_URL + "/", timeout=timeout)


@pytest.mark.asyncio
async def test_found_parses_camel_case_payload():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json={
            "id": 2,
            "name": "Ibuprofen",
            "category": "NSAID",
            "dosageMg": 400,
            "sideEffects": ["Stomach pain", "Headache"],
        })

    http, client = _client(handler)
    async with http:
        result = await client.lookup(2)

    assert seen == [f"{BASE_URL}/drugs/2"]
    assert result.ok
    assert result.drug.name == "Ibuprofen"
    assert result.drug.dosage_mg == 400
    assert result.drug.side_effects == ["Stomach pain", "Headache"]


@pytest.mark.asyncio
async def test_404_is_not_found():
    http, client = _client(lambda request: httpx.Response(404, json={"message": "missing"}))
    async with http:
        result = await client.lookup(42)

    assert result.status is LookupStatus.NOT_FOUND
    assert not result.ok


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(500, text="Drug not found with id: 3"),
    httpx.Response(200, text="not json"),
    httpx.Response(200, json={"category": "NSAID"}),
    httpx.Response(200, json={"name": "Bad", "dosageMg": -5}),
])
async def test_server_errors_and_bad_payloads_are_unreachable(response):
    http, client = _client(lambda request: response)
    async with http:
        result = await client.lookup(3)

    assert result.status is LookupStatus.UNREACHABLE


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [httpx.ConnectError, httpx.ReadTimeout])
async def test_transport_failures_are_unreachable(error):
    def handler(request):
        raise error("boom", request=request)

    http, client = _client(handler)
    async with http:
        result = await client.lookup(1)

    assert result.status is LookupStatus.UNREACHABLE
    assert result.drug is None


@pytest.mark.asyncio
@pytest.mark.parametrize("drug_id,expected_path", [
    ("../admin/reset", "/drugs/..%2Fadmin%2Freset"),
    ("1?force=true", "/drugs/1%3Fforce%3Dtrue"),
    ("7#frag", "/drugs/7%23frag"),
    (12, "/drugs/12"),
])
async def test_drug_id_stays_inside_one_path_segment(drug_id, expected_path):
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(404)

    http, client = _client(handler)
    async with http:
        result = await client.lookup(drug_id)

    assert result.status is LookupStatus.NOT_FOUND
    assert len(seen) == 1
    assert seen[0].host == "drug-db.test"
    assert seen[0].raw_path.decode() == expected_path
    assert seen[0].query == b""


@pytest.mark.asyncio
@pytest.mark.parametrize("drug_id", ["..", ".", ""])
async def test_dot_segment_ids_never_hit_the_network(drug_id):
    def handler(request):
        raise AssertionError(f"unexpected request to {request.url}")

    http, client = _client(handler)
    async with http:
        result = await client.lookup(drug_id)

    assert result.status is LookupStatus.NOT_FOUND


@pytest.mark.asyncio
async def test_mock_store_ships_sample_catalogue():
    store = MockDrugStore()

    results = [await store.lookup(drug_id) for drug_id in range(1, 11)]
    by_string_id = await store.lookup("2")
    missing = await store.lookup(11)

    assert all(result.ok for result in results)
    assert [result.drug.name for result in results][:2] == ["Paracetamol", "Ibuprofen"]
    assert by_string_id.drug.category == "NSAID"
    assert missing.status is LookupStatus.NOT_FOUND
