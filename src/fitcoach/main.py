"""
FitCoach - CLI Entry Point.

Usage:
    fitcoach run                  Start the Telegram bot (long polling)
    fitcoach chat                 Talk to the coach in the terminal
    fitcoach health               Check configuration
    fitcoach db                   Check database connection and tables
    fitcoach latest-plan USER_ID  Show a user's most recent workout plan
    fitcoach --help               Show help
"""

import asyncio
import logging
import sys

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

app = typer.Typer(
    name="fitcoach",
    help="AI FITCOACH PRO - your personal Telegram fitness trainer.",
    add_completion=False,
)
console = Console()
logger = logging.getLogger("fitcoach")


def setup_logging(level: str = "INFO") -> None:
    """Setup logging with visible output."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("telegram").setLevel(logging.WARNING)


def _warn_missing_credentials(settings) -> None:
    if not settings.store_configured:
        logger.warning("Supabase credentials missing. Database features will not work.")
    if not settings.completion_configured:
        logger.warning("GROQ_API_KEY missing. AI features will not work.")


@app.command()
def run(
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log all prompts to prompt_logs/"),
) -> None:
    """Start the Telegram bot."""
    from fitcoach.config import get_settings

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        missing = ", ".join(str(err["loc"][0]).upper() for err in e.errors())
        logger.error(f"Missing or invalid configuration: {missing}")
        raise typer.Exit(1)

    setup_logging(settings.log_level)
    _warn_missing_credentials(settings)

    from fitcoach.bot.commands import build_dispatcher
    from fitcoach.bot.telegram import TelegramBot
    from fitcoach.llm.prompt_logger import enable_prompt_logging
    from telegram import Update

    if log_prompts or settings.fitcoach_log_prompts:
        enable_prompt_logging(True)

    bot = TelegramBot(build_dispatcher())
    application = bot.build_application(settings.telegram_bot_token)
    logger.info("Starting long polling...")
    # run_polling handles SIGINT/SIGTERM and shuts the application down
    application.run_polling(allowed_updates=Update.ALL_TYPES)


@app.command()
def chat(
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log all prompts to prompt_logs/"),
    user_id: int | None = typer.Option(None, "--user-id", "-u", help="User id to chat as (default DEV_USER_ID)"),
    name: str = typer.Option("Dev", "--name", "-n", help="First name shown in greetings"),
) -> None:
    """Start an interactive chat session in the terminal."""
    from fitcoach.bot.commands import build_dispatcher
    from fitcoach.bot.console import ConsoleResponder, handle_console_input
    from fitcoach.config import settings
    from fitcoach.conversation.transport import InboundMessage
    from fitcoach.llm.prompt_logger import enable_prompt_logging, get_session_log_dir

    setup_logging("WARNING")
    if log_prompts:
        enable_prompt_logging(True)
        console.print("[dim]Prompt logging enabled. Check prompt_logs/ after the session.[/dim]")

    console.print(
        Panel.fit(
            "[bold green]AI FITCOACH PRO[/bold green]\n"
            "Your personal fitness trainer.\n\n"
            "[dim]Type /start to begin, /help for commands.[/dim]\n"
            "[dim]Type 'exit' or 'quit' to end the session.[/dim]",
            title="Welcome",
            border_style="green",
        )
    )

    dispatcher = build_dispatcher()
    responder = ConsoleResponder(console)
    user = InboundMessage(
        user_id=user_id if user_id is not None else settings.dev_user_id,
        username=name.lower(),
        first_name=name,
    )

    async def _loop() -> None:
        while True:
            user_input = console.input("\n[bold blue]You:[/bold blue] ").strip()
            if user_input.lower() in ("exit", "quit", "q"):
                console.print("\n[dim]Goodbye![/dim]")
                return
            if not user_input:
                continue
            try:
                await handle_console_input(dispatcher, responder, user, user_input)
            except Exception as e:
                console.print(f"\n[red]Error: {e}[/red]")

    try:
        asyncio.run(_loop())
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[dim]Session interrupted. Goodbye![/dim]")

    log_dir = get_session_log_dir()
    if log_dir:
        console.print(f"\n[dim]Prompts logged to: {log_dir}[/dim]")


@app.command()
def health() -> None:
    """Check system health and configuration."""
    from fitcoach.config import get_settings

    console.print("\n[bold]FitCoach Health Check[/bold]\n")

    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with TELEGRAM_BOT_TOKEN.[/dim]")
        raise typer.Exit(1)

    console.print("[green]OK[/green] Configuration loaded")
    console.print(f"   Environment: {settings.fitcoach_env}")
    console.print(f"   Log level: {settings.log_level}")
    console.print("[green]OK[/green] Telegram bot token configured")

    if settings.completion_configured:
        console.print(f"[green]OK[/green] Completion service: {settings.completion_model}")
    else:
        console.print("[yellow]WARN[/yellow] GROQ_API_KEY missing, AI features disabled")

    if settings.store_configured and settings.supabase_url.startswith("https://"):
        console.print("[green]OK[/green] Supabase configured")
    elif settings.store_configured:
        console.print("[yellow]WARN[/yellow] Supabase URL may be invalid")
    else:
        console.print("[yellow]WARN[/yellow] Supabase credentials missing, database features disabled")

    console.print(
        f"[dim]INFO[/dim] Policies: validation={settings.answer_validation}, "
        f"mid-dialog commands={settings.mid_dialog_commands}, "
        f"keep dialog on failure={settings.keep_dialog_on_failure}"
    )
    console.print("\n[green]Health check complete![/green]")


@app.command()
def db() -> None:
    """Check database connection and schema."""
    from fitcoach.db.client import TABLES, count_rows, get_client

    console.print("\n[bold]Database Connection Check[/bold]\n")

    try:
        get_client()
        console.print("[green]OK[/green] Connected to Supabase")
    except Exception as e:
        console.print(f"\n[red]FAIL Database connection failed: {e}[/red]")
        raise typer.Exit(1)

    console.print("\n[bold]Table Status:[/bold]")
    for table in TABLES:
        try:
            count = count_rows(table)
            console.print(f"  [green]OK[/green] {table}: {count if count is not None else '?'} rows")
        except Exception as e:
            console.print(f"  [red]FAIL[/red] {table}: {e}")

    console.print("\n[green]Database check complete![/green]")


@app.command("latest-plan")
def latest_plan(
    user_id: int = typer.Argument(..., help="Telegram user id"),
) -> None:
    """Show a user's most recent workout plan."""
    from fitcoach.db.client import get_latest_workout_plan

    try:
        plan = asyncio.run(get_latest_workout_plan(user_id))
    except Exception as e:
        console.print(f"[red]FAIL {e}[/red]")
        raise typer.Exit(1)

    if not plan:
        console.print(f"[dim]No workout plans for {user_id}.[/dim]")
        return

    console.print(f"[dim]Created: {plan.get('created_at', '?')}[/dim]\n")
    console.print(Markdown((plan.get("plan_data") or {}).get("content", "")))


@app.command()
def version() -> None:
    """Show version information."""
    from fitcoach import __version__

    console.print(f"FitCoach version {__version__}")


if __name__ == "__main__":
    app()
