# Copyright (c) Meta Platforms, Inc. and affiliates.
import sys

from pydantic import BaseModel, ConfigDict, Field

# No list can reach this length, so a cursor holding it never yields a handle.
STOP_INDEX = sys.maxsize


class Cursor(BaseModel):
    """
    The index the next handle will bind to. Shared between whoever drives
    the loop and the handle currently alive; only the handle should move it.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)
    next_index: int = Field(default=0, ge=0, le=STOP_INDEX)

    @property
    def stopped(self) -> bool:
        return self.next_index == STOP_INDEX

    def advance(self, steps: int) -> None:
        self.next_index = min(self.next_index + steps, STOP_INDEX)

    def stop(self) -> None:
        self.next_index = STOP_INDEX
