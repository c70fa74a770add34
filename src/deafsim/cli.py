"""CLI interface for DeafSim."""

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from deafsim import __version__
from deafsim.config import Settings, get_settings, normalize_language
from deafsim.constants import MAX_LEVEL, MIN_LEVEL, RECOGNITION_RATES
from deafsim.core import Conversation
from deafsim.hearing import HearingLossSimulator, InvalidConfiguration, resolve_language
from deafsim.i18n import UIStrings, get_strings
from deafsim.llm.client import ChatClientError

app = typer.Typer(
    name="deafsim",
    help="Hearing loss simulator for LLM conversations",
    no_args_is_help=True,
)

console = Console()

SAMPLE_TEXT = "What time does the train to the city leave tomorrow morning"


def version_callback(value: bool):
    if value:
        console.print(f"deafsim version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = False,
):
    """DeafSim - talk to an LLM through simulated hearing loss."""
    pass


# --- Interactive shell ---


@dataclass
class ShellState:
    """Mutable state of one interactive chat session."""

    settings: Settings
    conversation: Conversation
    strings: UIStrings = field(init=False)

    def __post_init__(self):
        self.strings = get_strings(self.conversation.simulator.language)


def print_banner(state: ShellState) -> None:
    s = state.strings
    simulator = state.conversation.simulator
    client = state.conversation.client

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_row(s.api_endpoint, client.base_url)
    table.add_row(s.model, client.model)
    table.add_row(s.deaf_level, f"{simulator.level}/10 ({simulator.level_description})")
    table.add_row(s.language, simulator.language_label)
    table.add_row(
        s.system_prompt,
        f"[green]{s.configured}[/]" if state.settings.has_system_prompt else f"[dim]{s.none}[/]",
    )

    commands = "\n".join([s.cmd_exit, s.cmd_models, s.cmd_level, s.cmd_lang, s.cmd_help, s.cmd_clear])

    console.print()
    console.print(Panel(f"[bold]{s.welcome}[/]", style="white on blue"))
    console.print(f"[cyan]{s.config_title}:[/]")
    console.print(table)
    console.print()
    console.print(f"[yellow]{s.commands}:[/]")
    console.print(f"[dim]{commands}[/]")
    console.rule(style="dim")


def handle_models_command(state: ShellState) -> None:
    s = state.strings
    client = state.conversation.client

    try:
        console.print("[dim]Fetching models...[/]")
        models = client.list_models()
    except ChatClientError as e:
        console.print(f"[red]{s.error}: {e}[/]")
        return

    if not models:
        console.print(f"[yellow]{s.no_models}[/]")
        return

    console.print(f"\n[cyan]{s.models_available}:[/]")
    for i, model in enumerate(models, 1):
        marker = "[green]*[/]" if model.id == client.model else " "
        console.print(f"  {marker} [dim]\\[{i}][/] {model.id}")
    console.print()

    answer = typer.prompt(s.select_model, default="", show_default=False).strip()
    if not answer:
        return

    selected = None
    if answer.isdigit() and 1 <= int(answer) <= len(models):
        selected = models[int(answer) - 1].id
    else:
        selected = next((m.id for m in models if m.id.lower() == answer.lower()), None)

    if selected:
        client.model = selected
        console.print(f"[green]{s.model_changed}: {selected}[/]")


def handle_level_command(state: ShellState, args: str) -> None:
    s = state.strings
    try:
        level = int(args.strip())
    except ValueError:
        level = 0

    if not MIN_LEVEL <= level <= MAX_LEVEL:
        console.print(f"[red]{s.invalid_level}[/]")
        return

    state.conversation.reconfigure(level=level)
    simulator = state.conversation.simulator
    console.print(f"[green]{s.level_changed}: {level}/10 ({simulator.level_description})[/]")


def handle_lang_command(state: ShellState, args: str) -> None:
    try:
        language = resolve_language(args)
    except InvalidConfiguration:
        console.print(f"[red]{state.strings.invalid_lang}[/]")
        return

    state.conversation.reconfigure(language=language)
    state.strings = get_strings(language)
    label = state.conversation.simulator.language_label
    console.print(f"[green]{state.strings.lang_changed}: {label}[/]")


def process_user_input(state: ShellState, text: str) -> None:
    """Degrade a message, show what was heard, then stream the reply."""
    s = state.strings
    result = state.conversation.hear(text)

    console.print()
    console.print(Panel(
        f"[dim]{result.degraded}[/]",
        title=f"{s.degraded_prompt} ({s.loss_percentage}: {result.loss_percentage}%)",
        title_align="left",
        border_style="yellow",
    ))

    console.print(f"[cyan]{s.response}:[/]")
    try:
        for chunk in state.conversation.reply_stream():
            console.print(chunk, end="", markup=False, highlight=False)
        console.print()
    except ChatClientError as e:
        console.print()
        console.print(f"[red]{s.error}: {e}[/]")
    console.rule(style="cyan")


def dispatch(state: ShellState, line: str) -> bool:
    """Handle one line of input. Returns False when the shell should exit."""
    text = line.strip()
    if not text:
        return True

    command = text.lower()
    if command in ("/exit", "/quit"):
        console.print(f"[dim]{state.strings.goodbye}[/]")
        return False
    if command == "/help":
        print_banner(state)
    elif command == "/clear":
        console.clear()
        print_banner(state)
    elif command == "/models":
        handle_models_command(state)
    elif command.startswith("/level "):
        handle_level_command(state, text[len("/level "):])
    elif command.startswith("/lang "):
        handle_lang_command(state, text[len("/lang "):])
    elif command.startswith("/"):
        console.print(f"[dim]{state.strings.unknown_command}[/]")
    else:
        process_user_input(state, text)
    return True


@app.command()
def chat(
    level: Annotated[Optional[int], typer.Option("--level", "-l", help="Hearing loss level 1-10 (default: DEAF_LEVEL)")] = None,
    lang: Annotated[Optional[str], typer.Option("--lang", help="Language: en, it or agnostic (default: LANGUAGE)")] = None,
    model: Annotated[Optional[str], typer.Option("--model", "-m", help="Model id (default: MODEL)")] = None,
):
    """Chat with an LLM that hears you through simulated hearing loss."""
    settings = get_settings()
    conversation = Conversation(settings)
    conversation.reconfigure(level=level, language=lang)
    if model:
        conversation.client.model = model

    state = ShellState(settings=settings, conversation=conversation)
    print_banner(state)

    while True:
        try:
            line = console.input(f"[bold green]{state.strings.prompt_label}[/][dim] ❯[/] ")
        except (EOFError, KeyboardInterrupt):
            console.print(f"\n[dim]{state.strings.goodbye}[/]")
            break
        if not dispatch(state, line):
            break


# --- One-shot commands ---


@app.command()
def simulate(
    text: Annotated[str, typer.Argument(help="Text to degrade")],
    level: Annotated[int, typer.Option("--level", "-l", help="Hearing loss level 1-10")] = 5,
    lang: Annotated[str, typer.Option("--lang", help="Language: en, it or agnostic")] = "en",
    seed: Annotated[Optional[int], typer.Option("--seed", help="Random seed for reproducible output")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the result as JSON")] = False,
):
    """Show what a listener with hearing loss would hear (no LLM call).

    Examples:
        deafsim simulate "Where is the station?" --level 7
        deafsim simulate "Dove si trova la stazione?" --lang it --seed 42
    """
    try:
        simulator = HearingLossSimulator(level=level, language=lang, seed=seed)
    except InvalidConfiguration as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    result = simulator.transform(text)

    if as_json:
        payload = result.to_dict()
        payload["seed"] = simulator.seed_used
        typer.echo(json.dumps(payload, ensure_ascii=False))
        return

    console.print(f"[dim]Level {simulator.level}/10 ({simulator.level_description}), "
                  f"{simulator.language_label}, seed {simulator.seed_used}[/]")
    console.print(f"[bold]Original:[/] {result.original}")
    console.print(f"[yellow bold]Heard:[/]    {result.degraded}")
    console.print(f"[dim]Signal loss: {result.loss_percentage}%[/]")


def count_verbatim(words: list[str], degraded: str) -> int:
    """Count input words that come through unchanged, one match per copy."""
    return sum((Counter(words) & Counter(degraded.split())).values())


def measure_level(simulator: HearingLossSimulator, text: str, trials: int) -> tuple[float, float]:
    """Run ``trials`` transforms and return (verbatim %, average loss %)."""
    words = text.split()
    kept = 0
    loss = 0
    for _ in range(trials):
        result = simulator.transform(text)
        kept += count_verbatim(words, result.degraded)
        loss += result.loss_percentage

    verbatim = 100 * kept / (trials * len(words)) if words else 0.0
    return verbatim, loss / trials


@app.command()
def profile(
    text: Annotated[str, typer.Option("--text", "-t", help="Sample utterance")] = SAMPLE_TEXT,
    trials: Annotated[int, typer.Option("--trials", "-n", help="Runs per level")] = 200,
    lang: Annotated[str, typer.Option("--lang", help="Language: en, it or agnostic")] = "en",
    seed: Annotated[Optional[int], typer.Option("--seed", help="Random seed")] = None,
):
    """Measure average signal loss at every level."""
    if trials < 1:
        console.print("[red]Error: --trials must be at least 1[/]")
        raise typer.Exit(1)

    language = normalize_language(lang)
    words = text.split()

    table = Table(title=f"Recognition profile ({trials} trials, {len(words)} words)")
    table.add_column("Level", justify="right", style="cyan")
    table.add_column("Description")
    table.add_column("Base keep %", justify="right")
    table.add_column("Verbatim %", justify="right")
    table.add_column("Avg loss %", justify="right")

    for level in range(MIN_LEVEL, MAX_LEVEL + 1):
        simulator = HearingLossSimulator(level=level, language=language, seed=seed)
        verbatim, avg_loss = measure_level(simulator, text, trials)
        table.add_row(
            str(level),
            simulator.level_description,
            str(RECOGNITION_RATES[level]),
            f"{verbatim:.1f}",
            f"{avg_loss:.1f}",
        )

    console.print(table)


@app.command()
def info():
    """Show configuration status."""
    settings = get_settings()
    language = settings.language_mode
    simulator = HearingLossSimulator(level=settings.deaf_level, language=language)

    table = Table(title="DeafSim Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("API Endpoint", settings.openai_url)
    table.add_row("API Key", "[green]configured[/]" if settings.openai_api_key else "[dim]none[/]")
    table.add_row("Model", settings.model)
    table.add_row("Deaf Level", f"{simulator.level}/10 ({simulator.level_description})")
    table.add_row("Language", simulator.language_label)
    table.add_row("System Prompt", "[green]configured[/]" if settings.has_system_prompt else "[dim]none[/]")
    table.add_row("Web Port", str(settings.web_port))
    table.add_row("Dev Port", str(settings.dev_server_port))

    console.print(table)


@app.command()
def ui(
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Port to serve on (default: WEB_PORT)")] = None,
    dev: Annotated[bool, typer.Option("--dev", help="Development mode (CORS + reload, DEV_PORT)")] = False,
    host: Annotated[str, typer.Option("--host", help="Host to bind to")] = "127.0.0.1",
):
    """Launch the web API.

    Examples:
        deafsim ui                # Serve on WEB_PORT (3000)
        deafsim ui --dev          # Reloading server on DEV_PORT
        deafsim ui --port 9000    # Custom port
    """
    import uvicorn

    settings = get_settings()
    if port is None:
        port = settings.dev_server_port if dev else settings.web_port

    console.print(f"[bold green]DeafSim Web API[/] http://{host}:{port}")
    console.print(f"[dim]API docs: http://{host}:{port}/api/docs[/]")
    console.print(f"[dim]Endpoint: {settings.openai_url}  Model: {settings.model}  "
                  f"Level: {settings.deaf_level}/10  Language: {settings.language_mode}[/]")

    if dev:
        uvicorn.run(
            "deafsim.api.app:create_dev_app",
            host=host,
            port=port,
            reload=True,
            factory=True,
            log_level="debug",
        )
    else:
        from deafsim.api.app import create_app

        uvicorn.run(create_app(dev=False), host=host, port=port, log_level="info")


if __name__ == "__main__":
    app()
