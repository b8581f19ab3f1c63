"""
Object models for coupe API responses and request payloads.

Response records are frozen. Wire names (``_id``, ``nom``, ``score_eq1``,
``tournamentName`` ...) are kept as aliases; attributes are snake_case.
"""
import base64
import binascii
from collections import OrderedDict
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, ValidationInfo

from .dates import WireDate
from .exceptions import MalformedReferenceError

PLACEHOLDER_NAME = "TBD"

# Keys under which a wrapped identifier may arrive, in lookup order
PARTICIPANT_ID_KEYS = ("$oid", "oid", "_id", "id")


def _id_field(**kwargs):
	return Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id", **kwargs)


class _Record(BaseModel):
	"""Immutable response record."""
	model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class _Payload(BaseModel):
	"""Request body; unset fields are omitted when sent."""
	model_config = ConfigDict(populate_by_name=True)


# ───────────────────────── identifiers ─────────────────────────

def coerce_participant_id(value: Any, field: Optional[str] = None) -> str:
	"""
	Normalise a participant reference into its identifier.

	Args:
		value: a bare id string, or an object such as ``{"$oid": "..."}``
		field: field name reported when the value is unusable

	Returns:
		The identifier string.

	Raises:
		MalformedReferenceError: if the value is in neither shape
	"""
	if isinstance(value, str):
		return value
	if isinstance(value, dict):
		for key in PARTICIPANT_ID_KEYS:
			candidate = value.get(key)
			if isinstance(candidate, str):
				return candidate
	raise MalformedReferenceError(field, value)


def _participant_id(value: Any, info: ValidationInfo) -> str:
	return coerce_participant_id(value, info.field_name)


ParticipantId = Annotated[str, BeforeValidator(_participant_id)]


class Reference(_Record):
	"""A related user/team/stadium, expanded or just its id."""
	id: str = _id_field()
	nom: Optional[str] = None
	prenom: Optional[str] = None
	name: Optional[str] = None
	logo: Optional[str] = None
	adresse: Optional[str] = None
	email: Optional[str] = None

	@property
	def is_expanded(self) -> bool:
		return any((self.nom, self.prenom, self.name))

	@property
	def display_name(self) -> str:
		parts = [p for p in (self.prenom, self.nom) if p]
		if parts:
			return " ".join(parts)
		return self.name or PLACEHOLDER_NAME


def _as_reference(value: Any, info: ValidationInfo) -> Any:
	# Unpopulated references arrive as a bare id
	if value is None or value == "" or isinstance(value, Reference):
		return value or None
	if isinstance(value, str):
		return {"_id": value}
	if isinstance(value, dict):
		if "_id" not in value and "id" not in value:
			return {"_id": coerce_participant_id(value, info.field_name)}
		return value
	raise MalformedReferenceError(info.field_name, value)


RefField = Annotated[Optional[Reference], BeforeValidator(_as_reference)]


def display(ref: Optional[Reference]) -> str:
	"""Name of a possibly missing reference, ``TBD`` when unknown."""
	return ref.display_name if ref is not None else PLACEHOLDER_NAME


# ───────────────────────── users ─────────────────────────

class UserRole(str, Enum):
	OWNER = "OWNER"
	ARBITRE = "ARBITRE"
	OTHER = "OTHER"


def _none_as_empty(value: Any) -> Any:
	return [] if value is None else value


def _as_text(value: Any) -> Any:
	if isinstance(value, (int, float)) and not isinstance(value, bool):
		return str(value)
	return value


class User(_Record):
	"""Backend user. ``role`` is kept as sent; see ``role_kind``."""
	id: str = _id_field()
	nom: str = ""
	prenom: str = ""
	email: str = ""
	tel: Annotated[Optional[str], BeforeValidator(_as_text)] = None
	age: Annotated[Optional[str], BeforeValidator(_as_text)] = None
	role: Optional[str] = None
	picture: Optional[str] = None

	@property
	def full_name(self) -> str:
		return " ".join(p for p in (self.prenom, self.nom) if p)

	@property
	def role_kind(self) -> UserRole:
		try:
			return UserRole((self.role or "").upper())
		except ValueError:
			return UserRole.OTHER

	@property
	def avatar(self) -> Optional[bytes]:
		"""Decoded profile picture, or None when missing or not base64."""
		if not self.picture:
			return None
		try:
			return base64.b64decode(self.picture, validate=True)
		except (binascii.Error, ValueError):
			return None


# ───────────────────────── matches ─────────────────────────

class MatchStatus(str, Enum):
	SCHEDULED = "SCHEDULED"
	IN_PROGRESS = "IN_PROGRESS"
	COMPLETED = "COMPLETED"
	CANCELLED = "CANCELLED"


def _status_or_scheduled(value: Any) -> MatchStatus:
	try:
		return MatchStatus(value)
	except (ValueError, TypeError):
		return MatchStatus.SCHEDULED


class MatchEventType(str, Enum):
	GOAL = "GOAL"
	YELLOW_CARD = "YELLOW_CARD"
	RED_CARD = "RED_CARD"
	SUBSTITUTION = "SUBSTITUTION"
	PENALTY = "PENALTY"


class MatchEvent(_Record):
	id: str = _id_field()
	match_id: str
	event_type: MatchEventType
	team_id: str
	player_id: Optional[str] = None
	minute: int
	description: Optional[str] = None
	created_at: Optional[str] = None


class MatchStatistics(_Record):
	"""Per-team counters. None means not recorded, not zero."""
	possession_team1: Optional[int] = None  # percentage
	possession_team2: Optional[int] = None
	shots_team1: Optional[int] = None
	shots_team2: Optional[int] = None
	shots_on_target_team1: Optional[int] = None
	shots_on_target_team2: Optional[int] = None
	corners_team1: Optional[int] = None
	corners_team2: Optional[int] = None
	fouls_team1: Optional[int] = None
	fouls_team2: Optional[int] = None
	yellow_cards_team1: Optional[int] = None
	yellow_cards_team2: Optional[int] = None
	red_cards_team1: Optional[int] = None
	red_cards_team2: Optional[int] = None


class Match(_Record):
	"""
	A bracket match.

	Team, stadium and referee come either expanded (match detail endpoints)
	or as bare ids (matches nested in a tournament); unfilled slots are None.
	"""
	id: str = _id_field()
	team1: RefField = Field(None, alias="id_equipe1")
	team2: RefField = Field(None, alias="id_equipe2")
	stadium: RefField = Field(None, alias="id_terrain")
	referee: RefField = Field(None, alias="id_arbitre")
	date: Optional[WireDate] = None
	score_eq1: int = Field(0, strict=True)
	score_eq2: int = Field(0, strict=True)
	statut: Annotated[MatchStatus, BeforeValidator(_status_or_scheduled)] = MatchStatus.SCHEDULED
	round: int
	next_match: Optional[str] = Field(None, alias="nextMatch")
	position_in_next_match: Optional[str] = Field(None, alias="positionInNextMatch")
	statistics: Optional[MatchStatistics] = None
	events: Optional[List[MatchEvent]] = None
	created_at: Optional[str] = Field(None, alias="createdAt")
	updated_at: Optional[str] = Field(None, alias="updatedAt")

	@property
	def team1_name(self) -> str:
		return display(self.team1)

	@property
	def team2_name(self) -> str:
		return display(self.team2)

	@property
	def score_line(self) -> str:
		return f"{self.score_eq1} - {self.score_eq2}"


def group_by_round(matches: List[Match]) -> "OrderedDict[int, List[Match]]":
	"""Group matches by round number, rounds ascending, input order kept inside a round."""
	rounds: Dict[int, List[Match]] = {}
	for match in matches:
		rounds.setdefault(match.round, []).append(match)
	return OrderedDict((r, rounds[r]) for r in sorted(rounds))


def round_name(round_number: int) -> str:
	names = {1: "Round 1", 2: "Quarter Finals", 3: "Semi Finals", 4: "Final"}
	return names.get(round_number, f"Round {round_number}")


# ───────────────────────── tournaments ─────────────────────────

class Tournament(_Record):
	"""Tournament (``coupe``) as returned by ``/coupes``."""
	id: str = _id_field()
	nom: str
	tournament_name: str = Field(alias="tournamentName")
	participants: List[ParticipantId]
	date_debut: WireDate
	date_fin: WireDate
	stadium: str
	date: WireDate
	time: str
	max_participants: int = Field(alias="maxParticipants")
	entry_fee: Optional[int] = Field(None, alias="entryFee")
	prize_pool: Optional[int] = Field(None, alias="prizePool")
	referee: Annotated[List[ParticipantId], BeforeValidator(_none_as_empty)] = Field(default_factory=list)
	categorie: str
	type: str
	organizer: RefField = Field(None, alias="id_organisateur")
	matches: Optional[List[Match]] = None
	is_bracket_generated: bool = Field(False, alias="isBracketGenerated")
	current_round: Optional[int] = Field(None, alias="currentRound")

	@property
	def is_full(self) -> bool:
		return len(self.participants) >= self.max_participants

	def rounds(self) -> "OrderedDict[int, List[Match]]":
		return group_by_round(self.matches or [])


# ───────────────────────── teams / stadiums / staff ─────────────────────────

class Team(_Record):
	"""Team (``equipe``) with members as ids."""
	id: str = _id_field()
	nom: str
	logo: Optional[str] = None
	categorie: Optional[str] = None
	id_academie: Optional[str] = None
	membres: List[ParticipantId] = Field(default_factory=list)


class PopulatedTeam(_Record):
	"""Team with members expanded to users."""
	id: str = _id_field()
	nom: str
	logo: Optional[str] = None
	categorie: Optional[str] = None
	id_academie: Optional[str] = None
	membres: List[User] = Field(default_factory=list)


class TeamStats(_Record):
	model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

	matches_played: Optional[int] = Field(None, validation_alias=AliasChoices("matches_played", "matchesPlayed", "played"))
	wins: Optional[int] = None
	draws: Optional[int] = None
	losses: Optional[int] = None
	goals_for: Optional[int] = Field(None, validation_alias=AliasChoices("goals_for", "goalsFor"))
	goals_against: Optional[int] = Field(None, validation_alias=AliasChoices("goals_against", "goalsAgainst"))
	points: Optional[int] = None


class Stadium(_Record):
	"""Stadium (``terrain``)."""
	id: str = _id_field()
	name: str
	location_verbal: str = ""
	capacity: Optional[int] = None
	number_of_fields: Optional[int] = None
	has_lights: bool = False
	is_available: bool = True
	amenities: List[str] = Field(default_factory=list)
	id_academie: Optional[str] = None
	latitude: Optional[float] = None
	longitude: Optional[float] = None


class Staff(_Record):
	id: str = _id_field()
	nom: Optional[str] = None
	prenom: Optional[str] = None
	email: Optional[str] = None
	role: Optional[str] = None
	id_academie: Optional[str] = None
	user: RefField = Field(None, alias="id_user")

	@property
	def full_name(self) -> str:
		parts = [p for p in (self.prenom, self.nom) if p]
		if parts:
			return " ".join(parts)
		return display(self.user)


# ───────────────────────── forum / leaderboard ─────────────────────────

class ForumMessage(_Record):
	id: str = _id_field()
	tournament_id: str = Field(validation_alias=AliasChoices("tournament_id", "tournamentId", "id_tournoi"))
	author: RefField = Field(None, validation_alias=AliasChoices("author", "id_user", "sender"))
	content: str = Field(validation_alias=AliasChoices("content", "text", "body"))
	created_at: WireDate = Field(validation_alias=AliasChoices("createdAt", "created_at", "timestamp"))


class LeaderboardEntry(_Record):
	"""One standings row. Counters are server-defined and may be missing."""
	model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

	team: RefField = Field(None, validation_alias=AliasChoices("team", "equipe", "id_equipe"))
	rank: Optional[int] = None
	played: Optional[int] = None
	wins: Optional[int] = None
	draws: Optional[int] = None
	losses: Optional[int] = None
	goals_for: Optional[int] = Field(None, validation_alias=AliasChoices("goals_for", "goalsFor"))
	goals_against: Optional[int] = Field(None, validation_alias=AliasChoices("goals_against", "goalsAgainst"))
	points: Optional[int] = None

	@property
	def team_name(self) -> str:
		return display(self.team)


# ───────────────────────── response wrappers ─────────────────────────

class APIResponse(_Record):
	"""Auth and create-coupe responses."""
	message: Optional[str] = None
	access_token: Optional[str] = None
	user: Optional[User] = None
	coupe: Optional[Tournament] = None


class MessageResponse(_Record):
	message: str = ""


class ExistsResponse(_Record):
	exists: bool


# ───────────────────────── request payloads ─────────────────────────

class CreateCoupeRequest(_Payload):
	nom: str
	participants: List[str] = Field(default_factory=list)
	date_debut: WireDate
	date_fin: WireDate
	tournament_name: str = Field(alias="tournamentName")
	stadium: str
	date: str
	time: str
	max_participants: int = Field(alias="maxParticipants")
	entry_fee: Optional[int] = Field(None, alias="entryFee")
	prize_pool: Optional[int] = Field(None, alias="prizePool")
	referee: List[str] = Field(default_factory=list)
	categorie: str
	type: str


class UpdateMatchScoreRequest(_Payload):
	score_eq1: int
	score_eq2: int
	statut: Optional[MatchStatus] = None


class CreateTeamRequest(_Payload):
	nom: str
	logo: Optional[str] = None
	categorie: Optional[str] = None
	id_academie: Optional[str] = None
	membres: List[str] = Field(default_factory=list)


class UpdateTeamRequest(_Payload):
	nom: Optional[str] = None
	logo: Optional[str] = None
	categorie: Optional[str] = None
	membres: Optional[List[str]] = None


class CreateStadiumRequest(_Payload):
	name: str
	location_verbal: str
	capacity: int
	number_of_fields: int = 1
	has_lights: bool = False
	is_available: bool = True
	amenities: List[str] = Field(default_factory=list)
	id_academie: Optional[str] = None
	latitude: Optional[float] = None
	longitude: Optional[float] = None


class UpdateStadiumRequest(_Payload):
	name: Optional[str] = None
	location_verbal: Optional[str] = None
	capacity: Optional[int] = None
	number_of_fields: Optional[int] = None
	has_lights: Optional[bool] = None
	is_available: Optional[bool] = None
	amenities: Optional[List[str]] = None
	latitude: Optional[float] = None
	longitude: Optional[float] = None


class CreateStaffRequest(_Payload):
	nom: str
	prenom: str
	email: Optional[str] = None
	tel: Optional[str] = None
	role: str
	id_academie: str


class UpdateStaffRequest(_Payload):
	nom: Optional[str] = None
	prenom: Optional[str] = None
	email: Optional[str] = None
	tel: Optional[str] = None
	role: Optional[str] = None


class CreateMessageRequest(_Payload):
	tournament_id: str
	content: str
