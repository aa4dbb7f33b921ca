"""Plain records that convert to and from JSON documents, and files holding them."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any

MAX_PIECES = 5


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    try:
        return data[key]
    except KeyError:
        raise KeyError(f"missing key {key!r}") from None


def _int(data: Any, key: str) -> int:
    value = _require(data, key)
    if not isinstance(value, (int, float)):
        raise TypeError(f"{key!r} must be a number, got {type(value).__name__}")
    return int(value)


def _float(data: Any, key: str) -> float:
    value = _require(data, key)
    if not isinstance(value, (int, float)):
        raise TypeError(f"{key!r} must be a number, got {type(value).__name__}")
    return float(value)


def _str(data: Any, key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise TypeError(f"{key!r} must be a string, got {type(value).__name__}")
    return value


def _bool(data: Any, key: str) -> bool:
    value = _require(data, key)
    if not isinstance(value, bool):
        raise TypeError(f"{key!r} must be a boolean, got {type(value).__name__}")
    return value


def _array(data: Any, key: str) -> list:
    value = _require(data, key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{key!r} must be an array, got {type(value).__name__}")
    return value


@dataclass
class Address:
    street: str = "this is a address"
    housenumber: int = 100
    postcode: int = 1024

    def to_json(self) -> dict:
        return {"street": self.street, "housenumber": self.housenumber, "postcode": self.postcode}

    @classmethod
    def from_json(cls, data: Any) -> Address:
        return cls(
            street=_str(data, "street"),
            housenumber=_int(data, "housenumber"),
            postcode=_int(data, "postcode"),
        )


@dataclass
class Student:
    age: int = 0
    num: int = 0
    name: str = ""

    def to_json(self) -> dict:
        return {"age": self.age, "num": self.num, "name": self.name}

    @classmethod
    def from_json(cls, data: Any) -> Student:
        return cls(age=_int(data, "age"), num=_int(data, "num"), name=_str(data, "name"))


@dataclass
class OutputInfo:
    width: int
    height: int
    frame_rate: int
    crf: int


@dataclass
class PieceInfo:
    pathname: str
    start_time: int = 0
    end_time: int = 0


@dataclass
class TrackInfo:
    name: str
    pieces: list[PieceInfo] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.pieces) > MAX_PIECES:
            raise ValueError(f"a track holds at most {MAX_PIECES} pieces, got {len(self.pieces)}")


def _output_from_json(data: Any) -> OutputInfo:
    return OutputInfo(
        width=_int(data, "width"),
        height=_int(data, "height"),
        frame_rate=_int(data, "frameRate"),
        crf=_int(data, "crf"),
    )


def _piece_from_json(data: Any) -> PieceInfo:
    return PieceInfo(
        pathname=_str(data, "file"),
        start_time=_int(data, "startTime"),
        end_time=_int(data, "endTime"),
    )


def _track_from_json(data: Any) -> TrackInfo:
    return TrackInfo(
        name=_str(data, "name"),
        pieces=[_piece_from_json(piece) for piece in _array(data, "pieces")],
    )


@dataclass
class Project:
    """An output format and the tracks of media pieces that make it up."""

    output: OutputInfo
    tracks: list[TrackInfo] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "output": {
                "width": self.output.width,
                "height": self.output.height,
                "frameRate": self.output.frame_rate,
                "crf": self.output.crf,
            },
            "tracks": [
                {
                    "name": track.name,
                    "pieces": [
                        {
                            "file": piece.pathname,
                            "startTime": piece.start_time,
                            "endTime": piece.end_time,
                        }
                        for piece in track.pieces
                    ],
                }
                for track in self.tracks
            ],
        }

    @classmethod
    def from_json(cls, data: Any) -> Project:
        return cls(
            output=_output_from_json(_require(data, "output")),
            tracks=[_track_from_json(track) for track in _array(data, "tracks")],
        )


@dataclass
class SimpleSettings:
    ok: bool
    height: float
    width: int
    name: str

    @classmethod
    def from_json(cls, data: Any) -> SimpleSettings:
        return cls(
            ok=_bool(data, "ok"),
            height=_float(data, "height"),
            width=_int(data, "width"),
            name=_str(data, "name"),
        )


def _read_json(path: str | os.PathLike) -> Any:
    with open(path, encoding="utf-8") as stream:
        return json.load(stream)


def load_project(path: str | os.PathLike) -> Project:
    """Read a project from a JSON file."""
    return Project.from_json(_read_json(path))


def save_project(project: Project, path: str | os.PathLike) -> None:
    """Write a project as JSON indented by four spaces, keys sorted."""
    with open(path, "w", encoding="utf-8") as stream:
        json.dump(project.to_json(), stream, indent=4, sort_keys=True, ensure_ascii=False)
        stream.write("\n")


def load_simple(path: str | os.PathLike) -> SimpleSettings:
    """Read simple settings from a JSON file."""
    return SimpleSettings.from_json(_read_json(path))