# recall_app/games/name_recall/client/terminal.py
"""Play one run in the terminal: the stand-in for the browser page."""
from __future__ import annotations
import asyncio

import click

from ..logic import machine as m
from ..logic.scorer import TARGET_COUNT
from .controller import RecallController

STAGE_TITLES = {
    m.Stage.WELCOME: "Word Recall Sprint",
    m.Stage.MEMORIZE: "Memorize {count} Names",
    m.Stage.RECALL: "Recall Phase",
    m.Stage.RESULT: "Scoreboard",
}


def _ask(prompt: str) -> "asyncio.Future[str]":
    return asyncio.ensure_future(asyncio.to_thread(input, prompt))


def _banner(stage: m.Stage, **fmt) -> None:
    title = STAGE_TITLES[stage].format(**fmt)
    click.echo()
    click.secho(title, bold=True)
    click.echo("=" * len(title))


def _show_names(names) -> None:
    for i in range(0, len(names), 5):
        click.echo("   " + "  ".join(f"{n:<14}" for n in names[i:i + 5]))


def _show_result(state: m.SessionState) -> None:
    out = state.outcome
    _banner(m.Stage.RESULT)
    click.secho(f"Score: {out.score}/{len(state.presented_names)}  [{out.status}]", bold=True)
    click.echo(out.status_copy)
    click.secho("Correct:   " + (", ".join(out.correct) or "-"), fg="green")
    click.secho("Incorrect: " + (", ".join(out.incorrect) or "-"), fg="red")
    click.echo("Missed:    " + (", ".join(out.missed) or "-"))


async def play_once(controller: RecallController, email: str = "") -> m.SessionState:
    """Drive ``controller`` through one full run, reading input from stdin."""
    s = controller.settings
    _banner(m.Stage.WELCOME)
    click.echo(f"You will see {s.display_count} names. Recall as many as you can "
               f"(aim for {TARGET_COUNT}).")

    # welcome: retry until names are loaded
    while controller.state.stage is m.Stage.WELCOME:
        if not email:
            email = (await _ask("Email: ")).strip()
        controller.start(email)
        email = ""
        if controller.state.loading:
            click.echo("Loading names...")
            await controller.wait_for(lambda st: not st.loading)
        if controller.state.error:
            click.secho(controller.state.error, fg="yellow")

    # memorize: countdown runs in the controller; Enter skips
    state = controller.state
    _banner(m.Stage.MEMORIZE, count=len(state.presented_names))
    click.echo(f"You have {s.memorize_seconds} seconds. Press Enter when ready to recall.")
    _show_names(state.presented_names)
    pending = _ask("")
    left_recall = asyncio.ensure_future(controller.wait_for(lambda st: st.stage is not m.Stage.MEMORIZE))
    done, _ = await asyncio.wait({pending, left_recall}, return_when=asyncio.FIRST_COMPLETED)
    if pending in done:
        controller.skip()
        left_recall.cancel()
    else:
        click.secho("Time's up. Press Enter to continue.", fg="yellow")
        await pending

    # recall
    _banner(m.Stage.RECALL)
    click.echo("Type the names you remember, separated by commas or spaces.")
    while controller.state.stage is m.Stage.RECALL:
        text = await _ask("> ")
        controller.submit(text)
        if controller.state.error:
            click.secho(controller.state.error, fg="yellow")
            continue
        click.echo("Calculating...")
        await controller.wait_for(lambda st: st.stage is not m.Stage.RECALL)

    final = controller.state
    if final.outcome is not None:
        _show_result(final)
        await controller.idle()
        if controller.state.persistence_error:
            click.secho(controller.state.persistence_error, fg="yellow")
        final = controller.state
    return final


async def run_terminal_game(api, *, settings: m.MachineSettings, fetch_floor: float,
                            email: str = "") -> m.SessionState:
    controller = RecallController(api, settings=settings, fetch_floor=fetch_floor)
    try:
        return await play_once(controller, email=email)
    finally:
        await controller.close()
