# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Prompt policy for update results.

Decides what a host's update prompt should contain for a given
UpdateResult. Rendering is left to the host: this module only produces
plain values that a UI layer turns into a dialog.

Rules:
  - NONE (including failed checks): no prompt
  - MAJOR: a single "update" action; the user cannot defer
  - MINOR / PATCH: "update" and "later"

Example:
    Wiring a UI handler:

        from storeupdate.policy import build_prompt

        def show_dialog(result):
            prompt = build_prompt(result)
            if prompt is None:
                return
            my_toolkit.alert(prompt.title, prompt.message, buttons=prompt.actions)

        checker = UpdateChecker(result_handler=show_dialog)

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from storeupdate.config.loader import DEFAULT_PROMPT_MESSAGE, DEFAULT_PROMPT_TITLE
from storeupdate.logging import Logger, get_global_logger
from storeupdate.results import UpdatePriority, UpdateResult

PromptAction = Literal["update", "later"]
ResultHandler = Callable[[UpdateResult], None]


@dataclass(frozen=True)
class UpdatePrompt:
    """Content of an update prompt.

    Attributes:
        priority: Priority that triggered the prompt (never NONE).
        title: Dialog title.
        message: Dialog body text.
        actions: Actions to offer, in display order.
    """

    priority: UpdatePriority
    title: str
    message: str
    actions: tuple[PromptAction, ...]

    @property
    def can_defer(self) -> bool:
        return "later" in self.actions


def prompt_actions(priority: UpdatePriority) -> tuple[PromptAction, ...]:
    """Return the actions allowed for a priority (empty for NONE)."""
    if priority is UpdatePriority.NONE:
        return ()
    if priority is UpdatePriority.MAJOR:
        return ("update",)
    return ("update", "later")


def build_prompt(
    result: UpdateResult,
    *,
    title: str = DEFAULT_PROMPT_TITLE,
    message: str = DEFAULT_PROMPT_MESSAGE,
) -> UpdatePrompt | None:
    """Build the prompt for a result, or None when nothing should be shown.

    Args:
        result: Outcome of an update check.
        title: Dialog title.
        message: Dialog body text.

    Returns:
        An UpdatePrompt, or None for UpdatePriority.NONE (which also covers
        every failed check).
    """
    actions = prompt_actions(result.priority)
    if not actions:
        return None
    return UpdatePrompt(
        priority=result.priority, title=title, message=message, actions=actions
    )


def make_log_handler(
    *,
    title: str = DEFAULT_PROMPT_TITLE,
    message: str = DEFAULT_PROMPT_MESSAGE,
    logger: Logger | None = None,
) -> ResultHandler:
    """Create the default result handler.

    The handler draws nothing. It reports the prompt a UI would show through
    the library logger, and reports failed checks as warnings.
    """

    def _handle(result: UpdateResult) -> None:
        log = logger or get_global_logger()
        if result.error is not None:
            log.warning("PROMPT", f"Update check failed: {result.error}")
        prompt = build_prompt(result, title=title, message=message)
        if prompt is None:
            log.verbose("PROMPT", "No update prompt needed")
            return
        log.verbose(
            "PROMPT",
            f"{prompt.title}: {prompt.message} "
            f"[{prompt.priority.value}; actions: {', '.join(prompt.actions)}]",
        )

    return _handle
