from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from brewstate.domain.actions import MachineState


class DepositStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    current_load: int
    max_load: int
    warning: Optional[str] = None

    def render(self) -> str:
        line = f"{self.name}: {self.current_load}/{self.max_load}"
        return f"{line} {self.warning}" if self.warning else line


class MachineStatus(BaseModel):
    deposits: List[DepositStatus] = Field(default_factory=list)
    state: MachineState

    def render(self) -> str:
        lines = [d.render() for d in self.deposits]
        lines.append(f"State: {self.state.value}")
        return "\n".join(lines)
