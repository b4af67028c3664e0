# Copyright (c) Meta Platforms, Inc. and affiliates.
from pydantic import BaseModel, ConfigDict, Field


class MutationArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # Index of the first element handed out
    start_index: int = Field(default=0, ge=0)
    # Upper bound on handles handed out in one pass, None for unbounded.
    # insert_and_process on every element never terminates otherwise.
    max_steps: int | None = Field(default=None, gt=0)
