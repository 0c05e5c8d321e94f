"""Mapped geometry — timestamps expressed as positions along the timeline."""

from pydantic import BaseModel, ConfigDict


class MappedPoint(BaseModel):
    """A single timestamp placed on the timeline."""

    model_config = ConfigDict(frozen=True)

    id: str                                 # "<prefix>-<value>", used as a render key
    percent: float                          # 0-100 for points inside the window
    value: int                              # Epoch milliseconds


class MappedInterval(BaseModel):
    """A pair of mapped points. Recomputed every render, never persisted."""

    model_config = ConfigDict(frozen=True)

    id: str
    source: MappedPoint
    target: MappedPoint
