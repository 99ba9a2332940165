"""
Copyright 2026 prismanis authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

Undoable scene actions.

Each action records enough to be applied in either direction. Objects
removed from the scene are kept whole (with their former list positions)
so undo can reinsert them, and transform snapshots are clones that no
live object shares.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Union, TYPE_CHECKING

from .transform import Transform

if TYPE_CHECKING:
    from .scene_objs import BaseSceneObj


@dataclass
class AddAction:
    obj: 'BaseSceneObj'


@dataclass
class RemoveAction:
    """
    Attributes:
        entries: ``(index, object)`` pairs in increasing index order, the
            index being the object's position in the scene before removal
    """
    entries: List[Tuple[int, 'BaseSceneObj']]

    @property
    def objects(self) -> List['BaseSceneObj']:
        return [obj for _, obj in self.entries]


@dataclass
class TransformRecord:
    obj_id: str
    old: Transform
    new: Transform


@dataclass
class TransformAction:
    records: List[TransformRecord] = field(default_factory=list)

    @property
    def ids(self) -> List[str]:
        return [r.obj_id for r in self.records]


SceneAction = Union[AddAction, RemoveAction, TransformAction]


class History:
    """
    Linear undo/redo log.

    ``past`` holds applied actions (most recent last) and ``future`` the
    undone ones. Pushing a new action clears ``future``. A transform batch
    may be in progress, during which undo and redo are refused.
    """

    def __init__(self) -> None:
        self.past: List[SceneAction] = []
        self.future: List[SceneAction] = []
        self.in_progress_index = None

    @property
    def is_in_progress(self) -> bool:
        return self.in_progress_index is not None

    def push(self, action: SceneAction) -> int:
        """Append an action, clear the redo stack, and return its index in ``past``."""
        self.past.append(action)
        self.future.clear()
        return len(self.past) - 1

    def can_undo(self) -> bool:
        return bool(self.past) and not self.is_in_progress

    def can_redo(self) -> bool:
        return bool(self.future) and not self.is_in_progress

    def clear(self) -> None:
        self.past.clear()
        self.future.clear()
        self.in_progress_index = None
