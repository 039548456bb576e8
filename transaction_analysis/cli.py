"""CLI for the ``transaction_analysis`` package.

A Typer-based console interface over :class:`~transaction_analysis.queries.TransactionQueries`.
Environment variables are loaded from a local ``.env`` using ``python-dotenv``
before any command runs. The dataset path resolves from ``--data-path``, then
``TRANSACTION_ANALYSIS_DATA``, then ``transactions.json`` in the working
directory.

``report`` prints every query in sequence; the remaining subcommands print a
single query result each. Load failures are written to stderr as
``Error: ...`` and exit with status 1.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .errors import EmptyDatasetError, MalformedDataError, ResourceNotFoundError
from .logging_setup import configure_logging, get_logger
from .models import Transaction
from .queries import TOP_N_DEFAULT, TransactionQueries

DATA_PATH_ENV_VAR = "TRANSACTION_ANALYSIS_DATA"
DEFAULT_DATA_FILE = "transactions.json"

# Names used by ``report`` when none are given on the command line.
DEFAULT_REPORT_SENDER = "Tom Shelby"
DEFAULT_REPORT_CLIENT = "Aunt Polly"

_logger = get_logger("transaction_analysis.cli")


@dataclass(frozen=True, slots=True)
class _Settings:
    data_path: Path


# ---- Small module-level helpers used by CLI commands -------------------------


def _resolve_data_path(cli_value: Path | None) -> Path:
    """Resolve the dataset path: explicit option, then env var, then default."""

    if cli_value is not None:
        return cli_value
    env_val = os.getenv(DATA_PATH_ENV_VAR)
    if env_val and env_val.strip():
        return Path(env_val.strip()).expanduser()
    return Path.cwd() / DEFAULT_DATA_FILE


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _load_queries(ctx: typer.Context) -> TransactionQueries:
    """Load the dataset configured on the root command or exit with status 1."""

    settings: _Settings = ctx.obj
    try:
        return TransactionQueries.from_file(settings.data_path)
    except ResourceNotFoundError as e:
        raise _fail(f"{e}. Pass --data-path or set {DATA_PATH_ENV_VAR}.") from e
    except MalformedDataError as e:
        raise _fail(f"Failed to load transactions: {e}") from e
    except PermissionError as e:
        raise _fail(f"Permission denied: {settings.data_path}") from e
    except OSError as e:
        raise _fail(f"Cannot read {settings.data_path}: {e.strerror or e}") from e


def format_amount(value: float) -> str:
    return f"{value:.2f}"


def format_transaction(tx: Transaction) -> str:
    """Render one transaction as a single tab-separated line."""

    issue = "-"
    if tx.issue_id is not None:
        state = "solved" if tx.issue_solved else "open"
        issue = f"#{tx.issue_id} {state}"
        if tx.issue_message:
            issue += f" ({tx.issue_message})"
    return "\t".join(
        [
            format_amount(tx.amount),
            tx.sender_full_name or "",
            tx.beneficiary_full_name or "",
            issue,
        ]
    )


def _echo_lines(lines: Iterable[str]) -> None:
    for line in lines:
        typer.echo(line)


def _section(title: str) -> None:
    typer.echo(f"== {title} ==")


# ---- Typer application -------------------------------------------------------


app = typer.Typer(
    help="Analytical queries over a JSON file of financial transactions.",
    no_args_is_help=False,
    add_completion=False,
)


# Module-level option object shared through ``Annotated`` below (ruff B008).
DATA_PATH_OPTION: OptionInfo = typer.Option(
    "--data-path",
    help=f"Path to the transactions JSON file (env {DATA_PATH_ENV_VAR}).",
    dir_okay=False,
    file_okay=True,
    exists=False,  # allow non-existent here; the loader reports a clear error
)


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    data_path: Annotated[Path | None, DATA_PATH_OPTION] = None,
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (e.g. DEBUG, INFO, WARNING)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables), configures logging, and records the
    resolved dataset path for subcommands.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    # Central logging setup so child loggers inherit configuration
    configure_logging(log_level)

    ctx.obj = _Settings(data_path=_resolve_data_path(data_path))
    _logger.debug("using dataset %s", ctx.obj.data_path)

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


@app.command("report")
def report_cmd(
    ctx: typer.Context,
    sender: str = typer.Option(DEFAULT_REPORT_SENDER, help="Sender for the sent-by query."),
    client: str = typer.Option(DEFAULT_REPORT_CLIENT, help="Client for the open-issues query."),
) -> None:
    """Run every query and print the results in sequence."""

    queries = _load_queries(ctx)

    _section("Total amount")
    typer.echo(format_amount(queries.total_amount()))

    _section(f"Amount sent by {sender}")
    typer.echo(format_amount(queries.total_amount_sent_by(sender)))

    _section("Highest transaction amount")
    try:
        typer.echo(format_amount(queries.max_amount()))
    except EmptyDatasetError:
        typer.echo("n/a (no transactions)")

    _section("Unique clients")
    typer.echo(str(queries.count_unique_clients()))

    _section(f"Open compliance issues for {client}")
    typer.echo("yes" if queries.has_open_compliance_issues(client) else "no")

    _section("Transactions by beneficiary")
    _echo_lines(
        f"{name or ''}\t{format_transaction(tx)}"
        for name, tx in queries.transactions_by_beneficiary_name().items()
    )

    _section("Unsolved issue ids")
    _echo_lines(str(i) for i in sorted(queries.unsolved_issue_ids()))

    _section("Solved issue messages")
    _echo_lines(queries.solved_issue_messages())

    _section(f"Top {TOP_N_DEFAULT} transactions by amount")
    _echo_lines(format_transaction(tx) for tx in queries.top3_transactions_by_amount())

    _section("Top sender")
    typer.echo(queries.top_sender() or "n/a (no senders)")


@app.command("total")
def total_cmd(ctx: typer.Context) -> None:
    """Print the sum of all transaction amounts."""

    typer.echo(format_amount(_load_queries(ctx).total_amount()))


@app.command("sent-by")
def sent_by_cmd(
    ctx: typer.Context,
    sender: Annotated[str, typer.Argument(help="Sender full name (case-insensitive).")],
) -> None:
    """Print the total amount sent by one sender."""

    typer.echo(format_amount(_load_queries(ctx).total_amount_sent_by(sender)))


@app.command("max")
def max_cmd(ctx: typer.Context) -> None:
    """Print the highest transaction amount."""

    queries = _load_queries(ctx)
    try:
        value = queries.max_amount()
    except EmptyDatasetError as e:
        raise _fail(str(e)) from e
    typer.echo(format_amount(value))


@app.command("unique-clients")
def unique_clients_cmd(ctx: typer.Context) -> None:
    """Print the number of distinct senders and beneficiaries."""

    typer.echo(str(_load_queries(ctx).count_unique_clients()))


@app.command("open-issues")
def open_issues_cmd(
    ctx: typer.Context,
    client: Annotated[str, typer.Argument(help="Client full name (case-insensitive).")],
) -> None:
    """Print whether a client has an unsolved compliance issue."""

    typer.echo("yes" if _load_queries(ctx).has_open_compliance_issues(client) else "no")


@app.command("by-beneficiary")
def by_beneficiary_cmd(ctx: typer.Context) -> None:
    """Print the first transaction received by each beneficiary."""

    index = _load_queries(ctx).transactions_by_beneficiary_name()
    _echo_lines(f"{name or ''}\t{format_transaction(tx)}" for name, tx in index.items())


@app.command("unsolved-ids")
def unsolved_ids_cmd(ctx: typer.Context) -> None:
    """Print the ids of open compliance issues, ascending."""

    _echo_lines(str(i) for i in sorted(_load_queries(ctx).unsolved_issue_ids()))


@app.command("solved-messages")
def solved_messages_cmd(ctx: typer.Context) -> None:
    """Print the messages of solved compliance issues in dataset order."""

    _echo_lines(_load_queries(ctx).solved_issue_messages())


@app.command("top")
def top_cmd(
    ctx: typer.Context,
    limit: int = typer.Option(TOP_N_DEFAULT, min=0, help="Number of transactions to print."),
) -> None:
    """Print the highest-amount transactions, highest first."""

    _echo_lines(
        format_transaction(tx) for tx in _load_queries(ctx).top_transactions_by_amount(limit)
    )


@app.command("top-sender")
def top_sender_cmd(ctx: typer.Context) -> None:
    """Print the sender with the largest total sent amount."""

    name = _load_queries(ctx).top_sender()
    if name is None:
        raise _fail("no senders in dataset")
    typer.echo(name)


def main() -> None:
    """Console-script entry point."""

    app()


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    # Running as a module: `python -m transaction_analysis.cli`
    main()
