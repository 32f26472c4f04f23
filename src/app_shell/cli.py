import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from src.adapters.clock import FixedClock, SystemClock
from src.adapters.memory import InMemoryFacetofaceRepo, load_seed
from src.adapters.time_display import DisplayTimeAdapter
from src.components import session_list
from src.components.html import HtmlWriter
from src.components.plugin_settings import build_settings_page
from src.components.session_list import RenderSessionListInput
from src.components.strings import StringManager
from src.domain.policy import PolicyEngine
from src.rules.loader import load_rules
from src.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_rules(path: str) -> Rules:
    if not Path(path).exists():
        logger.error(f"Rules file {path} not found.")
        sys.exit(1)
    return load_rules(Path(path))


def get_repo(seed: str | None) -> InMemoryFacetofaceRepo:
    if seed is None:
        return InMemoryFacetofaceRepo()
    try:
        return load_seed(Path(seed))
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Cannot load seed data: {e}")
        sys.exit(1)


def handle_sessions(rules: Rules, repo: InMemoryFacetofaceRepo, args: argparse.Namespace) -> None:
    if not repo.facetoface_exists(args.facetoface_id):
        logger.error(f"No sessions found for activity {args.facetoface_id}.")
        sys.exit(1)

    clock = FixedClock(datetime.fromisoformat(args.now)) if args.now else SystemClock()
    flags = PolicyEngine(rules).viewer_flags(args.role)

    inp = RenderSessionListInput(
        customfields=repo.get_customfields(),
        sessions=repo.get_sessions_for_viewer(args.facetoface_id, args.user_id),
        viewattendees=flags.viewattendees,
        editsessions=flags.editsessions,
        signuplinks=not args.no_signup_links,
        uploadbookings=args.upload_bookings,
        table_class=rules.session_list.table_class,
        customfield_delimiter=rules.session_list.customfield_delimiter,
    )
    output = session_list.run(
        inp,
        strings=StringManager.for_lang(rules.plugin.lang),
        attendees=repo,
        clock=clock,
        formatter=DisplayTimeAdapter.from_rules(rules.display),
        writer=HtmlWriter(rules.display.pix_base_url),
    )
    print(output.html)


def handle_settings(rules: Rules, repo: InMemoryFacetofaceRepo, args: argparse.Namespace) -> None:
    page = build_settings_page(
        strings=StringManager.for_lang(rules.plugin.lang),
        roles=repo.get_all_roles(),
        profile_fields=repo.get_custom_profile_fields(),
        customfields=repo.get_customfields(),
        sitenotices=repo.get_sitenotices(),
        writer=HtmlWriter(rules.display.pix_base_url),
    )
    for view in page.describe():
        default = "" if view.default is None else f" = {view.default!r}"
        hidden = " (hidden)" if view.hidden else ""
        print(f"[{view.kind}] {view.name}{default}{hidden}")
        if view.choices and args.choices:
            for key, label in view.choices.items():
                print(f"    {key}: {label}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Face-to-face sessions CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    parser.add_argument("--seed", help="YAML seed file for sessions, signups and roles")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # sessions
    sessions_parser = subparsers.add_parser("sessions", help="Print the session list table")
    sessions_parser.add_argument("facetoface_id", type=int, help="Activity id")
    sessions_parser.add_argument("--role", default="student", help="Viewer role shortname")
    sessions_parser.add_argument("--user-id", type=int, help="Viewer user id")
    sessions_parser.add_argument("--now", help="Render as of this ISO timestamp")
    sessions_parser.add_argument("--no-signup-links", action="store_true")
    sessions_parser.add_argument("--upload-bookings", action="store_true")

    # settings
    settings_parser = subparsers.add_parser("settings", help="List declared settings")
    settings_parser.add_argument("--choices", action="store_true", help="Show choice sets")

    args = parser.parse_args()

    rules = get_rules(args.rules)
    repo = get_repo(args.seed)

    if args.command == "sessions":
        handle_sessions(rules, repo, args)
    elif args.command == "settings":
        handle_settings(rules, repo, args)


if __name__ == "__main__":
    main()
