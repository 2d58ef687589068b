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

"""Result-handling policy for storeupdate.

This package decides what a host should present for an update result,
without presenting anything itself.

Modules:

prompt
    Prompt contents per UpdatePriority and the default (logging) handler.

Example:
    Build a prompt for a result:

        from storeupdate.policy import build_prompt

        prompt = build_prompt(result)
        if prompt is not None and not prompt.can_defer:
            print("Mandatory update")

"""

from .prompt import (
    PromptAction,
    ResultHandler,
    UpdatePrompt,
    build_prompt,
    make_log_handler,
    prompt_actions,
)

__all__ = [
    "PromptAction",
    "ResultHandler",
    "UpdatePrompt",
    "build_prompt",
    "make_log_handler",
    "prompt_actions",
]
