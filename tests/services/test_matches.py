"""
Tests for match detail, score entry and tournament brackets.
"""
import pytest

from coupeapi.exceptions import ApiError, DecodeError
from coupeapi.models import CreateCoupeRequest, MatchStatus

from ..mocks.backend import MockBackend, match_json, tournament_json


@pytest.mark.asyncio
async def test_update_score(api, backend, logged_in):
	backend.add("PATCH", "/match/m1/score", match_json(score_eq1=2, score_eq2=1, statut="COMPLETED"))

	result = await api.matches.update_score("m1", 2, 1, MatchStatus.COMPLETED)

	request = backend.last
	assert request.method == "PATCH"
	assert request.headers["Authorization"] == "Bearer stored-token"
	assert MockBackend.body(request) == {"score_eq1": 2, "score_eq2": 1, "statut": "COMPLETED"}
	assert result.value.score_line == "2 - 1"
	assert result.value.statut is MatchStatus.COMPLETED


@pytest.mark.asyncio
async def test_update_score_without_status_omits_it(api, backend):
	backend.add("PATCH", "/match/m1/score", {"match": match_json(score_eq1=1)})
	result = await api.matches.update_score("m1", 1, 0)
	assert MockBackend.body(backend.last) == {"score_eq1": 1, "score_eq2": 0}
	assert result.value.score_eq1 == 1


@pytest.mark.asyncio
async def test_get_match_populated(api, backend):
	backend.add("GET", "/match/m1", {"match": match_json(
		id_equipe1={"_id": "t1", "nom": "Espoir"},
		id_equipe2={"_id": "t2", "nom": "Etoile"},
		events=[{"_id": "e1", "match_id": "m1", "event_type": "GOAL", "team_id": "t1", "minute": 12}],
	)})
	result = await api.matches.get("m1")
	assert result.value.team1_name == "Espoir"
	assert result.value.events[0].minute == 12


@pytest.mark.asyncio
async def test_get_match_not_found(api, backend):
	backend.add("GET", "/match/missing", {"message": "Match not found"}, status=404)
	result = await api.matches.get("missing")
	assert isinstance(result.error, ApiError)
	assert result.error.status == 404


@pytest.mark.asyncio
async def test_tournament_rounds(api, backend):
	backend.add("GET", "/coupes", {"coupes": [tournament_json(isBracketGenerated=True, matches=[
		match_json("a", round=2, id_equipe1=None, id_equipe2=None),
		match_json("b", round=1),
		match_json("c", round=1),
	])]})
	result = await api.tournaments.list()
	rounds = result.value[0].rounds()
	assert list(rounds) == [1, 2]
	assert [m.id for m in rounds[1]] == ["b", "c"]
	assert rounds[2][0].team1_name == "TBD"


@pytest.mark.asyncio
async def test_tournament_list_bad_date_fails(api, backend):
	backend.add("GET", "/coupes", [tournament_json(date_fin="30-11-2025")])
	result = await api.tournaments.list()
	assert isinstance(result.error, DecodeError)


@pytest.mark.asyncio
async def test_create_coupe_uses_explicit_token_and_fixed_dates(api, backend, logged_in):
	backend.add("POST", "/create-coupe", {"message": "created", "coupe": tournament_json()})
	coupe = CreateCoupeRequest(
		nom="Coupe d'hiver",
		tournament_name="Winter Cup",
		date_debut="2025-11-24T01:47:22.895Z",
		date_fin="2025-11-30",
		stadium="s1",
		date="2025-11-24",
		time="18:00",
		max_participants=8,
		categorie="U17",
		type="knockout",
	)
	result = await api.tournaments.create(coupe, token="organizer-token")

	body = MockBackend.body(backend.last)
	assert backend.last.headers["Authorization"] == "Bearer organizer-token"
	assert body["tournamentName"] == "Winter Cup"
	assert body["maxParticipants"] == 8
	assert body["date_debut"] == "2025-11-24T01:47:22.895+0000"
	assert body["date_fin"] == "2025-11-30T00:00:00.000+0000"
	assert "entryFee" not in body
	assert result.value.coupe.id == "c1"


@pytest.mark.asyncio
async def test_add_participant_and_generate_bracket(api, backend):
	backend.add("PATCH", "/add-participant/c1", {"coupe": tournament_json(participants=["t1", "t2", "t3"])})
	backend.add("POST", "/c1/generate-bracket", tournament_json(isBracketGenerated=True, matches=[match_json()]))

	result = await api.tournaments.add_participant("c1", "t3")
	assert MockBackend.body(backend.last) == {"userId": "t3"}
	assert result.value.participants == ["t1", "t2", "t3"]

	result = await api.tournaments.generate_bracket("c1")
	assert result.value.is_bracket_generated
	assert len(result.value.matches) == 1


@pytest.mark.asyncio
async def test_list_matches_by_tournament(api, backend):
	backend.add("GET", "/match/tournament/c1", [match_json("a"), match_json("b", round=2)])
	result = await api.matches.list_by_tournament("c1")
	assert [m.round for m in result.value] == [1, 2]
