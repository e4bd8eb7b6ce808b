"""Interactive prompts using questionary."""

from __future__ import annotations

from collections.abc import Callable

import questionary
from questionary import Choice, Style

from app_spine.core.errors import CredentialsNotFoundError, PromptUnavailableError
from app_spine.core.models import Selection, Workspace
from app_spine.ops.grants import ALL_WORKSPACES

custom_style = Style(
    [
        ("qmark", "fg:#00ff00 bold"),
        ("question", "bold"),
        ("answer", "fg:#00ff00 bold"),
        ("pointer", "fg:#00ff00 bold"),
        ("highlighted", "fg:#00ff00 bold"),
        ("selected", "fg:#00ff00"),
        ("separator", "fg:#6c6c6c"),
        ("disabled", "fg:#858585 italic"),
    ]
)


class QuestionaryPrompter:
    """:class:`~app_spine.core.protocols.Prompter` backed by questionary.

    Args:
        targets: Returns the installation targets to choose from.
        interactive: ``False`` when stdin is not a terminal.
    """

    def __init__(self, targets: Callable[[], list[Selection]], *, interactive: bool = True) -> None:
        self._targets = targets
        self._interactive = interactive

    @property
    def interactive(self) -> bool:
        return self._interactive

    def select_install_target(self) -> Selection:
        targets = self._targets()
        if not targets:
            raise CredentialsNotFoundError(
                "No saved credentials were found",
                remediation="Log in to a team, then run the command again",
            )

        index = questionary.select(
            "Choose a team and app environment",
            choices=[Choice(title=target.label, value=i) for i, target in enumerate(targets)],
            style=custom_style,
        ).ask()

        if index is None:
            raise PromptUnavailableError("Team selection was cancelled", code="prompt_cancelled")
        return targets[index]

    def select_org_workspace(
        self,
        workspaces: list[Workspace],
        *,
        all_workspaces_first: bool,
    ) -> str:
        all_choice = Choice(title="All workspaces", value=ALL_WORKSPACES)
        choices = [
            Choice(title=f"{ws.name or ws.team_domain} ({ws.team_id})", value=ws.team_id)
            for ws in workspaces
        ]
        if all_workspaces_first:
            choices.insert(0, all_choice)
        else:
            choices.append(all_choice)

        answer = questionary.select(
            "Choose a workspace to grant access to",
            choices=choices,
            style=custom_style,
        ).ask()
        return answer or ""
