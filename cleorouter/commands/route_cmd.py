"""CLI handlers for routing commands: analyze, decide, hint."""

from __future__ import annotations

import json

import click

from cleorouter.commands._helpers import get_local_context, get_remote_context, run
from cleorouter.models.complexity import ComplexityScore
from cleorouter.models.decision import DelegationDecision
from cleorouter.services.complexity import analyze_task_complexity


def _echo_complexity(complexity: ComplexityScore) -> None:
    click.echo(f"Score: {complexity.score}/100 ({complexity.recommendation.value})")
    click.echo(f"  Factors: {', '.join(complexity.factors) or '-'}")
    click.echo(f"  Reasoning: {complexity.reasoning}")


def _echo_decision(decision: DelegationDecision) -> None:
    if decision.should_delegate:
        click.echo(f"Delegate to: {decision.target_agent}")
    else:
        click.echo("Handle directly")
    flags = [name for name, on in (("early exit", decision.early_exit), ("cached", decision.cached)) if on]
    if flags:
        click.echo(f"  ({', '.join(flags)})")
    click.echo(f"  Reasoning: {decision.reasoning}")
    _echo_complexity(decision.complexity)


@click.group("route")
def route_group():
    """Score messages and decide delegation."""
    pass


@route_group.command("analyze")
@click.argument("message")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
def route_analyze(message: str, as_json: bool):
    """Score the complexity of MESSAGE."""
    complexity = analyze_task_complexity(message)
    if as_json:
        click.echo(json.dumps(complexity.to_dict(), indent=2))
    else:
        _echo_complexity(complexity)


@route_group.command("decide")
@click.argument("message")
@click.option("--remote", is_flag=True, help="Ask the running server (shared cache)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
def route_decide(message: str, remote: bool, as_json: bool):
    """Decide whether MESSAGE should be delegated."""

    async def _decide():
        if remote:
            ctx = await get_remote_context()
            try:
                return await ctx.routing.decide(message)
            finally:
                await ctx.close()
        ctx = await get_local_context()
        try:
            return await ctx.delegation_service.decide(message)
        finally:
            await ctx.close()

    decision = run(_decide())
    if as_json:
        click.echo(json.dumps(decision.to_dict(), indent=2))
    else:
        _echo_decision(decision)


@route_group.command("hint")
@click.argument("message")
@click.option("--remote", is_flag=True, help="Ask the running server (shared cache)")
def route_hint(message: str, remote: bool):
    """Print the system-prompt delegation hint for MESSAGE."""

    async def _hint():
        if remote:
            ctx = await get_remote_context()
            try:
                return await ctx.routing.hint(message)
            finally:
                await ctx.close()
        ctx = await get_local_context()
        try:
            return await ctx.hint_builder.build(message)
        finally:
            await ctx.close()

    _, hint = run(_hint())
    click.echo(hint)
