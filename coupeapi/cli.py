#!/usr/bin/env python
"""
Command line access to the coupe backend: login, tournaments, brackets,
standings, match detail and referee search.
"""
import argparse
import asyncio
import getpass
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .client import CoupeAPI
from .config import load_config
from .models import display, round_name
from .result import Result

console = Console()


def configure_logging(verbose: bool = False) -> None:
	logger = logging.getLogger()
	if any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
		return
	logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
	handler = logging.StreamHandler()
	handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
	logger.addHandler(handler)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(description="Coupe tournament client")
	parser.add_argument("--config", type=str, default="config.ini", help="INI file with a [coupe] section (default: config.ini)")
	parser.add_argument("--base-url", type=str, default=None, help="Override the API base URL")
	parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
	sub = parser.add_subparsers(dest="command", required=True)

	login = sub.add_parser("login", help="Log in and store the session")
	login.add_argument("email")
	login.add_argument("--password", default=None, help="Prompted when omitted")

	sub.add_parser("logout", help="Forget the stored session")
	sub.add_parser("tournaments", help="List tournaments")

	bracket = sub.add_parser("bracket", help="Show a tournament's bracket by round")
	bracket.add_argument("tournament_id")

	standings = sub.add_parser("standings", help="Show a tournament's standings")
	standings.add_argument("tournament_id")

	match = sub.add_parser("match", help="Show a match")
	match.add_argument("match_id")

	arbitres = sub.add_parser("arbitres", help="Search referees")
	arbitres.add_argument("query", nargs="?", default="")

	return parser.parse_args(argv)


def _fail(result: Result) -> int:
	console.print(f"[red]Error:[/red] {result.error}")
	return 1


async def _login(api: CoupeAPI, args) -> int:
	password = args.password or getpass.getpass("Password: ")
	result = await api.auth.login(args.email, password)
	if not result.ok:
		return _fail(result)
	user = api.sessions.user
	console.print(f"Logged in as [bold]{user.full_name if user else args.email}[/bold]")
	return 0


async def _tournaments(api: CoupeAPI, args) -> int:
	result = await api.tournaments.list()
	if not result.ok:
		return _fail(result)
	table = Table(title="Tournaments")
	for column in ("ID", "Name", "Category", "Start", "Participants", "Bracket"):
		table.add_column(column)
	for t in result.value:
		table.add_row(
			t.id, t.tournament_name or t.nom, t.categorie, t.date_debut.strftime("%Y-%m-%d"),
			f"{len(t.participants)}/{t.max_participants}",
			"yes" if t.is_bracket_generated else "no",
		)
	console.print(table)
	return 0


async def _bracket(api: CoupeAPI, args) -> int:
	result = await api.tournaments.list()
	if not result.ok:
		return _fail(result)
	tournament = next((t for t in result.value if t.id == args.tournament_id), None)
	if tournament is None:
		console.print(f"[red]Tournament {args.tournament_id} not found[/red]")
		return 1
	rounds = tournament.rounds()
	if not rounds:
		if tournament.is_bracket_generated:
			console.print("Bracket generated but no matches available")
		else:
			console.print("Bracket not generated yet")
		return 0
	for number, matches in rounds.items():
		table = Table(title=round_name(number))
		for column in ("Match", "Team 1", "Score", "Team 2", "Status"):
			table.add_column(column)
		for m in matches:
			table.add_row(m.id, m.team1_name, m.score_line, m.team2_name, m.statut.value)
		console.print(table)
	return 0


async def _standings(api: CoupeAPI, args) -> int:
	result = await api.leaderboard.standings(args.tournament_id)
	if not result.ok:
		return _fail(result)
	table = Table(title="Standings")
	for column in ("#", "Team", "P", "W", "D", "L", "Pts"):
		table.add_column(column)
	for pos, entry in enumerate(result.value, start=1):
		cells = (entry.played, entry.wins, entry.draws, entry.losses, entry.points)
		table.add_row(str(entry.rank or pos), entry.team_name, *("-" if c is None else str(c) for c in cells))
	console.print(table)
	return 0


async def _match(api: CoupeAPI, args) -> int:
	result = await api.matches.get(args.match_id)
	if not result.ok:
		return _fail(result)
	m = result.value
	console.print(f"[bold]{m.team1_name}[/bold] {m.score_line} [bold]{m.team2_name}[/bold]  ({m.statut.value})")
	console.print(f"{round_name(m.round)} | Stadium: {display(m.stadium)} | Referee: {display(m.referee)}")
	for event in m.events or []:
		console.print(f"  {event.minute}' {event.event_type.value} {event.description or ''}")
	return 0


async def _arbitres(api: CoupeAPI, args) -> int:
	search = api.arbitre_search()
	pending = search.update_query(args.query)
	if pending is not None:
		await pending
	if search.error is not None:
		console.print(f"[red]Error:[/red] {search.error}")
		return 1
	table = Table(title="Referees")
	for column in ("ID", "Name", "Email"):
		table.add_column(column)
	for user in search.results:
		table.add_row(user.id, user.full_name, user.email)
	console.print(table)
	return 0


COMMANDS = {
	"login": _login,
	"tournaments": _tournaments,
	"bracket": _bracket,
	"standings": _standings,
	"match": _match,
	"arbitres": _arbitres,
}


async def run(args: argparse.Namespace) -> int:
	config = load_config(args.config)
	if args.base_url:
		config = config.model_copy(update={"base_url": args.base_url})
	async with CoupeAPI(config) as api:
		if args.command == "logout":
			api.auth.logout()
			console.print("Logged out")
			return 0
		return await COMMANDS[args.command](api, args)


def main(argv: Optional[List[str]] = None) -> int:
	args = parse_args(argv)
	configure_logging(args.verbose)
	try:
		return asyncio.run(run(args))
	except KeyboardInterrupt:
		console.print("\nInterrupted")
		return 130


if __name__ == "__main__":
	sys.exit(main())
