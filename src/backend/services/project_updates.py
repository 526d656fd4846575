"""
Explicit project update operations.

Projects are not patched field by field. Each supported change has its own
type, so the ledger can enforce the rules that apply to it.
"""

from dataclasses import dataclass
from typing import Optional, Union

from models.records import ProgressStatus


@dataclass(frozen=True)
class AdvanceStatusManually:
    """Move a project strictly forward into official_acknowledgment or a later stage."""

    new_status: ProgressStatus
    actor_name: Optional[str] = None


@dataclass(frozen=True)
class OverrideStatus:
    """Administrative override: set any status, including an earlier one."""

    new_status: ProgressStatus
    actor_name: Optional[str] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class ReplaceEmailDraft:
    """Replace the drafted outreach email as a whole."""

    email_template: str
    email_subject: str
    email_recipient: str


ProjectUpdate = Union[AdvanceStatusManually, OverrideStatus, ReplaceEmailDraft]
