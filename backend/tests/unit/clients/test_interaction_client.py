import httpx
import pytest

from rxguard.schemas.interaction import RiskLevel
from rxguard.services.interaction_client import SERVICE_UNAVAILABLE_MESSAGE, InteractionClient

BASE_URL = "http://interaction.test"


@pytest.mark.asyncio
async def test_analyze_decodes_remote_verdict():
    def handler(request):
        assert request.url.path == "/interactions/analyze"
        assert request.url.params["drugA"] == "1"
        assert request.url.params["drugB"] == "2"
        return httpx.Response(200, json={
            "drugA": "Paracetamol",
            "drugB": "Ibuprofen",
            "riskLevel": "SAFE",
            "severityScore": 0,
            "message": "Analysis Summary: ...",
        })

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        verdict = await InteractionClient(http, BASE_URL).analyze(1, 2)

    assert verdict.drug_a == "Paracetamol"
    assert verdict.risk_level is RiskLevel.SAFE
    assert verdict.severity_score == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("handler", [
    lambda request: httpx.Response(503),
    lambda request: httpx.Response(200, json={"drugA": "x"}),
    lambda request: httpx.Response(200, json={
        "drugA": "a", "drugB": "b", "riskLevel": "APOCALYPTIC", "severityScore": 1, "message": "",
    }),
])
async def test_bad_responses_fall_back(handler):
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        verdict = await InteractionClient(http, BASE_URL).analyze(1, 2)

    assert (verdict.drug_a, verdict.drug_b) == ("UNKNOWN", "UNKNOWN")
    assert verdict.risk_level is RiskLevel.MODERATE
    assert verdict.severity_score == 10
    assert verdict.message == SERVICE_UNAVAILABLE_MESSAGE


@pytest.mark.asyncio
async def test_connection_error_falls_back():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        verdict = await InteractionClient(http, BASE_URL).analyze(1, 2)

    assert verdict.severity_score == 10
    assert verdict.message == "Interaction service unavailable (fallback)."


@pytest.mark.asyncio
async def test_null_message_keeps_remote_score():
    def handler(request):
        return httpx.Response(200, json={
            "drugA": "Ibuprofen",
            "drugB": "Naproxen",
            "riskLevel": "CRITICAL",
            "severityScore": 155,
            "message": None,
        })

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        verdict = await InteractionClient(http, BASE_URL).analyze(2, 3)

    assert verdict.risk_level is RiskLevel.CRITICAL
    assert verdict.severity_score == 155
    assert verdict.message == ""
