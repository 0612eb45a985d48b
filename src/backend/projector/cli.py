"""Command-line interface for the project definition wizard.

Usage:
    projector new --hints "Support chatbot for a bike shop" --persona pm
    projector new --template chatbot --output definition.md
    projector continue --session wizard_session.json
    projector templates
    projector domains
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Iterable
from enum import StrEnum
from pathlib import Path

from pydantic import ValidationError

from projector.agents.llm_client import AnthropicGenerationClient, GenerationClient, GenerationConfig
from projector.agents.session_manager import SessionManager
from projector.config import Settings, settings
from projector.exceptions import (
    AtEndError,
    AtStartError,
    GenerationError,
    ParseError,
    QuestionBudgetExhausted,
)
from projector.models.context import Context, Persona
from projector.models.question import (
    MultipleChoiceQuestion,
    Question,
    QuestionKind,
    RatingScaleQuestion,
    YesNoQuestion,
)
from projector.models.session import Session
from projector.security import InputSanitizer
from projector.services.domain_config import DomainConfig
from projector.services.template_service import TemplateRepository

logger = logging.getLogger(__name__)

# Attempts per question (and for the final document) before giving up
MAX_ATTEMPTS = 3
DEFAULT_SESSION_PATH = "wizard_session.json"


class Navigation(StrEnum):
    """Commands the user can type at any prompt."""

    BACK = "back"
    FORWARD = "forward"
    QUIT = "quit"


# -- terminal prompts ----------------------------------------------------------


def ask(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        return Navigation.QUIT.value


def confirm(prompt: str, default: bool = False) -> bool:
    suffix = " [Y/n] " if default else " [y/N] "
    while True:
        reply = ask(prompt + suffix).strip().lower()
        if not reply:
            return default
        if reply in {"y", "yes"}:
            return True
        if reply in {"n", "no", Navigation.QUIT.value}:
            return False
        print("Please answer yes or no.")


def _as_navigation(reply: str) -> Navigation | None:
    try:
        return Navigation(reply.strip().lower())
    except ValueError:
        return None


def _read_choice(options: list[str]) -> str | Navigation:
    for number, option in enumerate(options, start=1):
        print(f"  {number}. {option}")
    while True:
        reply = ask(f"Select [1-{len(options)}]: ")
        if command := _as_navigation(reply):
            return command
        reply = reply.strip()
        if reply.isdigit() and 1 <= int(reply) <= len(options):
            return options[int(reply) - 1]
        for option in options:
            if option.lower() == reply.lower():
                return option
        print("Please enter one of the listed numbers.")


def _read_yes_no() -> str | Navigation:
    while True:
        reply = ask("Yes or No? [Y/n] ")
        if command := _as_navigation(reply):
            return command
        normalized = reply.strip().lower()
        if normalized in {"", "y", "yes"}:
            return "Yes"
        if normalized in {"n", "no"}:
            return "No"
        print("Please answer yes or no.")


def _read_rating(scale: tuple[int, int]) -> str | Navigation:
    low, high = min(scale), max(scale)
    while True:
        reply = ask(f"Rate from {low} to {high}: ")
        if command := _as_navigation(reply):
            return command
        reply = reply.strip()
        if reply.isdigit() and low <= int(reply) <= high:
            return reply
        print(f"Please enter a whole number from {low} to {high}.")


def _read_free_text() -> str | Navigation:
    reply = ask("Your answer: ")
    if command := _as_navigation(reply):
        return command
    return InputSanitizer.sanitize_message(reply)


def read_response(question: Question) -> str | Navigation:
    """Prompt for an answer suited to the question's kind."""
    match question:
        case MultipleChoiceQuestion(options=options) if options:
            return _read_choice(options)
        case YesNoQuestion():
            return _read_yes_no()
        case RatingScaleQuestion(scale=scale):
            return _read_rating(scale)
        case _:
            return _read_free_text()


def display_question(question: Question, number: int, total: int) -> None:
    kind = QuestionKind(question.kind)
    print(f"Question {number}/{total} ({kind.label}): {question.text}")
    if question.help_text:
        print(f"Hint: {question.help_text}")


# -- wizard loop ---------------------------------------------------------------


async def _next_question(manager: SessionManager) -> Question | None:
    """Request a question, retrying contract and transport failures."""
    for attempt in range(1, MAX_ATTEMPTS + 1):
        try:
            return await manager.request_next_question()
        except (ParseError, GenerationError) as e:
            logger.warning("Question request attempt %d failed: %s", attempt, e)
            print(f"Error generating question: {e}")
    manager.mark_error(f"No valid question after {MAX_ATTEMPTS} attempts")
    return None


async def _finalize(manager: SessionManager) -> bool:
    for attempt in range(1, MAX_ATTEMPTS + 1):
        try:
            await manager.finalize()
            return True
        except GenerationError as e:
            logger.warning("Finalize attempt %d failed: %s", attempt, e)
            print(f"Error generating project definition: {e}")
    manager.mark_error(f"No project definition after {MAX_ATTEMPTS} attempts")
    return False


def offer_save_session(session: Session) -> None:
    if not confirm("Do you want to save this session for later?", default=False):
        return
    path = ask(f"Enter path to save session [{DEFAULT_SESSION_PATH}]: ").strip() or DEFAULT_SESSION_PATH
    try:
        session.save_to_file(path)
    except OSError as e:
        print(f"Could not save session: {e}")
        return
    print(f"Saved session to {path}")


async def run_wizard(
    session: Session,
    client: GenerationClient,
    output_path: Path | None = None,
    seed_questions: Iterable[Question] | None = None,
) -> int:
    """Run the interactive question loop, then write the project definition."""
    manager = SessionManager(session, client, seed_questions=seed_questions)
    manager.start()

    print(f"Starting wizard session with {manager.max_questions} questions")
    print("Type 'back' or 'forward' to revisit answered questions, 'quit' to exit")
    print()

    while True:
        question = manager.current_question
        if question is None:
            try:
                question = await _next_question(manager)
            except QuestionBudgetExhausted:
                print("Maximum number of questions reached")
                break
            if question is None:
                print("Giving up after repeated errors.")
                offer_save_session(manager.session)
                return 1

        display_question(question, manager.question_count + 1, manager.max_questions)
        reply = read_response(question)

        if reply is Navigation.QUIT:
            print("Exiting wizard")
            offer_save_session(manager.session)
            return 0
        if reply is Navigation.BACK:
            try:
                manager.go_back()
                print("Going back to previous question")
            except AtStartError as e:
                print(f"Cannot go back: {e}")
            continue
        if reply is Navigation.FORWARD:
            try:
                manager.go_forward()
                print("Going forward to next question")
            except AtEndError:
                manager.discard_pending()
                print("No later answered question; continuing with a new one")
            continue

        if InputSanitizer.detect_injection_attempt(reply):
            logger.warning("Answer to %s looks like a prompt injection attempt", question.id)
        manager.answer_current(reply)
        print()

    print("Generating project definition...")
    if not await _finalize(manager):
        offer_save_session(manager.session)
        return 1

    print(f"\n{manager.session.output}\n")

    if output_path:
        print(f"Saving project definition to {output_path}")
        manager.export_output(output_path)

    offer_save_session(manager.session)
    print("Wizard completed successfully!")
    return 0


# -- commands ------------------------------------------------------------------


def create_client(app_settings: Settings) -> AnthropicGenerationClient | None:
    client = AnthropicGenerationClient(GenerationConfig.from_settings(app_settings))
    if not client.is_available():
        print("Error: ANTHROPIC_API_KEY is not set", file=sys.stderr)
        return None
    return client


def load_repository(app_settings: Settings) -> TemplateRepository:
    domain_config = DomainConfig.load_default(app_settings.domains_config_path)
    return TemplateRepository.load(app_settings.templates_dir, domain_config=domain_config)


async def new_session(
    args: argparse.Namespace,
    app_settings: Settings,
    client: GenerationClient | None = None,
) -> int:
    print("Starting LLM-Powered Project Definition Wizard")

    seed_questions: list[Question] = []
    if args.template:
        repo = load_repository(app_settings)
        template_name = InputSanitizer.sanitize_name(args.template)
        template = repo.get_template(template_name)
        if template is None:
            print(f"Error: Template '{template_name}' not found", file=sys.stderr)
            return 1
        print(f"Using template: {template.name}")
        print(f"Description: {template.description}")
        session = Session.from_template(template, max_questions=args.questions)
        seed_questions = list(template.initial_questions)
    else:
        session = Session(context=Context(), max_questions=args.questions)

    if args.hints:
        session.context.starting_hints = InputSanitizer.sanitize_message(args.hints) or None
    if args.domain:
        session.context.domain = InputSanitizer.sanitize_name(args.domain) or None

    if args.persona:
        persona = Persona.from_name(args.persona)
        print(f"Using persona: {persona.label}")
        session.context.persona = persona

    client = client or create_client(app_settings)
    if client is None:
        return 1
    return await run_wizard(session, client, args.output, seed_questions=seed_questions)


async def continue_session(
    args: argparse.Namespace,
    app_settings: Settings,
    client: GenerationClient | None = None,
) -> int:
    print("Continuing LLM-Powered Project Definition Wizard")

    try:
        session = Session.load_from_file(args.session)
    except (OSError, ValidationError) as e:
        print(f"Error: Failed to load session file: {e}", file=sys.stderr)
        return 1

    client = client or create_client(app_settings)
    if client is None:
        return 1
    return await run_wizard(session, client, args.output)


def list_templates(repo: TemplateRepository) -> int:
    print("Available Templates")
    templates = repo.all_templates()
    if not templates:
        print("No templates available")
        return 0
    for number, template in enumerate(templates, start=1):
        print(f"{number}. {template.name} ({template.domain})")
        print(f"   {template.description}")
        print()
    return 0


def list_domains(repo: TemplateRepository) -> int:
    print("Available Domains")
    for domain in repo.all_domains():
        print(f"  - {domain}")
    return 0


def build_parser(app_settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="projector",
        description="LLM-Powered Dynamic Project Definition Wizard",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new = subparsers.add_parser("new", help="Start a new wizard session")
    new.add_argument("-i", "--hints", help="Starting hints for the wizard")
    new.add_argument("-d", "--domain", help="Domain for the project")
    new.add_argument(
        "-q",
        "--questions",
        type=int,
        default=app_settings.default_max_questions,
        help="Maximum number of questions",
    )
    new.add_argument("-t", "--template", help="Use a template")
    new.add_argument(
        "-p",
        "--persona",
        help="Persona mode (pm, architect, ux, compliance)",
    )
    new.add_argument("-o", "--output", type=Path, help="Output file for the project definition")

    cont = subparsers.add_parser("continue", help="Continue an existing wizard session")
    cont.add_argument("-s", "--session", type=Path, required=True, help="Path to the session file")
    cont.add_argument("-o", "--output", type=Path, help="Output file for the project definition")

    subparsers.add_parser("templates", help="List available templates")
    subparsers.add_parser("domains", help="List available domains")
    return parser


def configure_logging(verbose: bool, app_settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if (verbose or app_settings.debug) else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def main(argv: list[str] | None = None, app_settings: Settings = settings) -> int:
    """CLI entry point."""
    args = build_parser(app_settings).parse_args(argv)
    configure_logging(args.verbose, app_settings)

    if args.command == "new":
        if args.questions < 1:
            print("Error: --questions must be at least 1", file=sys.stderr)
            return 1
        return await new_session(args, app_settings)
    if args.command == "continue":
        return await continue_session(args, app_settings)
    if args.command == "templates":
        return list_templates(load_repository(app_settings))
    if args.command == "domains":
        return list_domains(load_repository(app_settings))
    return 1


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
