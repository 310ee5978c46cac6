"""Command line interface for validating and dry-running workflows."""

from __future__ import annotations

import asyncio
import json
import uuid
from pathlib import Path
from typing import Any, Optional

import typer
import yaml

from socialclaw.config import load_config
from socialclaw.contracts import NodeEvent, TriggerEvent, WorkflowDefinition, WorkflowNode
from socialclaw.engine import WorkflowRuntime, dry_run_dispatcher, validate_workflow
from socialclaw.errors import PolicyViolation, WorkflowError
from socialclaw.integrations import CredentialFacts, assess_channel, get_channel

app = typer.Typer(help="CLI for SocialClaw workflows")


@app.callback()
def main() -> None:
    """SocialClaw CLI entry point."""
    pass


def _load_document(path: Path) -> Any:
    text = path.read_text()
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def _read_workflow(path: Path) -> Any:
    if not path.exists():
        typer.secho(f"File not found: {path}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    try:
        return _load_document(path)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        typer.secho(f"Could not parse {path}: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


@app.command("validate")
def validate(path: Path) -> None:
    """
    Validate a workflow definition file (YAML or JSON).

    Prints every violation found, one per line, and exits with code 1 when
    the workflow is invalid.

    Example:
        socialclaw validate workflows/reengage.yaml
    """
    result = validate_workflow(_read_workflow(path))
    if result.ok:
        typer.echo("valid")
        return
    for error in result.errors:
        typer.echo(error)
    raise typer.Exit(code=1)


@app.command("run")
def run(
    path: Path,
    trigger_type: str = typer.Option(..., help="Type of the triggering event"),
    payload: str = typer.Option("{}", help="Trigger payload as a JSON object"),
    execution_id: Optional[str] = typer.Option(None, help="Correlation id for the run"),
    max_actions: Optional[int] = typer.Option(None, help="Override the configured cap"),
) -> None:
    """
    Dry-run a workflow against a trigger payload.

    Actions are validated and reported but never sent. Each lifecycle event
    is printed as it happens, followed by the number of actions executed.

    Example:
        socialclaw run reengage.yaml --trigger-type lead.inactive --payload '{"noReply": true}'
    """
    document = _read_workflow(path)
    result = validate_workflow(document)
    if not result.ok:
        for error in result.errors:
            typer.echo(error)
        raise typer.Exit(code=1)
    try:
        trigger_payload = json.loads(payload)
    except json.JSONDecodeError as e:
        typer.secho(f"Invalid payload JSON: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    if not isinstance(trigger_payload, dict):
        typer.secho("Payload must be a JSON object", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    config = load_config()
    workflow = WorkflowDefinition.model_validate(document)

    async def print_event(node: WorkflowNode, event: NodeEvent) -> None:
        details = json.dumps(event.details, sort_keys=True) if event.details else ""
        typer.echo(f"{event.level}\t{event.event_type}\t{node.id}\t{details}".rstrip())

    trigger = TriggerEvent(
        trigger_type=trigger_type,
        trigger_payload=trigger_payload,
        execution_id=execution_id or str(uuid.uuid4()),
    )
    runtime = WorkflowRuntime(
        dry_run_dispatcher(), max_pending_approvals=config.max_pending_approvals
    )
    try:
        outcome = asyncio.run(
            runtime.handle(
                workflow,
                trigger,
                config.max_actions if max_actions is None else max_actions,
                on_node_event=print_event,
            )
        )
    except PolicyViolation as e:
        typer.secho(f"blocked: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except WorkflowError as e:
        typer.secho(f"failed: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    if outcome.stopped_by_condition:
        typer.echo(f"stopped by condition {outcome.stopped_by_condition}")
    typer.echo(f"actions executed: {outcome.actions_executed}")


@app.command("readiness")
def readiness(
    channel: str,
    credential: list[str] = typer.Option(
        [], "--credential", "-c", help="Name of a credential that is present"
    ),
    verification_status: str = typer.Option(
        "", help="Latest live verification status (passed, failed, partial)"
    ),
    verified_at: Optional[str] = typer.Option(
        None, help="ISO-8601 timestamp of the latest live verification"
    ),
) -> None:
    """
    Show whether a channel is ready and what to fix if it is not.

    Example:
        socialclaw readiness whatsapp -c access_token -c phone_number_id \\
            --verification-status passed --verified-at 2026-10-01T09:00:00Z
    """
    try:
        spec = get_channel(channel)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=1)
    if verification_status not in ("", "passed", "failed", "partial"):
        typer.secho(
            f"Unknown verification status: {verification_status}", fg=typer.colors.RED
        )
        raise typer.Exit(code=1)

    facts = CredentialFacts(
        credentials={name: name in credential for name in spec.credential_names},
        latest_verification_status=verification_status,
        latest_verification_at=verified_at,
    )
    report = assess_channel(spec.name, facts, load_config().verification)
    contract = report.contract
    typer.echo(f"channel: {report.channel}")
    for field in ("ready", "connected", "verified", "test_send_passed", "stale"):
        typer.echo(f"{field}: {str(getattr(contract, field)).lower()}")
    if not report.suggestions:
        typer.echo("No fixes needed.")
        return
    typer.echo("suggestions:")
    for suggestion in report.suggestions:
        typer.echo(f"  {suggestion.id}\t{suggestion.title}\t{suggestion.action}")
