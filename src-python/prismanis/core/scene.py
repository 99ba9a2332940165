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
"""

import uuid as uuid_module
from typing import Iterable, List, Optional, Sequence, Set, Union

from shapely.geometry import Polygon

from .geometry import Point, Rect
from .history import (
    History, AddAction, RemoveAction, TransformAction, TransformRecord, SceneAction,
)
from .material import Material
from .ray import RayOptions
from .scene_objs import (
    BaseSceneObj, CurveObject, Lens, LensObject, LightObject,
    create_curve_object, create_lens_object, create_light_object, is_optical,
)


class Scene:
    """
    Container for scene objects, their selection and the undo/redo history.

    Ids passed to any query or mutation must exist; a missing id raises
    ValueError rather than being ignored.

    Attributes:
        objs (list): All objects in the scene, in insertion order
        selected_ids (set): Ids of the selected objects, always a subset of
            the ids in ``objs``
        history (History): Undo/redo log
        warning (str or None): Warning left by the last simulation, if any
        name (str or None): Optional name for the scene (used in exports)
    """

    def __init__(self):
        """Initialize an empty scene."""
        self.objs: List[BaseSceneObj] = []
        self.selected_ids: Set[str] = set()
        self.history = History()
        self.warning = None
        self.name = None
        self._uuid: str = str(uuid_module.uuid4())

    @property
    def uuid(self) -> str:
        """Unique identifier of the scene."""
        return self._uuid

    @property
    def optical_objs(self) -> List[BaseSceneObj]:
        """Objects that rays interact with (curves and lenses)."""
        return [obj for obj in self.objs if is_optical(obj)]

    @property
    def lights(self) -> List[LightObject]:
        return [obj for obj in self.objs if obj.type == 'light']

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_objects(self) -> List[BaseSceneObj]:
        return list(self.objs)

    def get_object_by_id(self, obj_id: str) -> Optional[BaseSceneObj]:
        for obj in self.objs:
            if obj.id == obj_id:
                return obj
        return None

    def object_exists(self, obj_id: str) -> bool:
        return self.get_object_by_id(obj_id) is not None

    def get_all_of_type(self, obj_type: str) -> List[BaseSceneObj]:
        return [obj for obj in self.objs if obj.type == obj_type]

    def _require(self, obj_id: str) -> BaseSceneObj:
        obj = self.get_object_by_id(obj_id)
        if obj is None:
            raise ValueError(f"No object with id '{obj_id}' in the scene")
        return obj

    def get_objects_at(self, point: Point) -> List[BaseSceneObj]:
        """Objects whose oriented transform rectangle covers ``point``."""
        sp = point.to_shapely()
        return [obj for obj in self.objs if _frame_polygon(obj).covers(sp)]

    def get_objects_in_rect(self, rect: Rect) -> List[BaseSceneObj]:
        """Objects whose oriented transform rectangle intersects ``rect``."""
        box = rect.to_shapely()
        return [obj for obj in self.objs if _frame_polygon(obj).intersects(box)]

    # ------------------------------------------------------------------
    # Adding and removing
    # ------------------------------------------------------------------

    def add(self, obj: BaseSceneObj) -> BaseSceneObj:
        """
        Append an object and record the addition.

        Raises:
            ValueError: If an object with the same id is already in the scene.
        """
        if self.object_exists(obj.id):
            raise ValueError(f"Object id '{obj.id}' is already in the scene")
        self.objs.append(obj)
        self.history.push(AddAction(obj))
        return obj

    def add_curve(
        self,
        points: Sequence[Point],
        material: Optional[Material] = None
    ) -> CurveObject:
        """Create a closed polygon from world-space points and add it."""
        return self.add(create_curve_object(points, material))

    def add_lens(
        self,
        lens: Lens,
        position: Point,
        height: float,
        rotation: float = 0.0,
        material: Optional[Material] = None
    ) -> LensObject:
        return self.add(create_lens_object(lens, position, height, rotation, material))

    def add_light(
        self,
        ray_config: Union[str, Sequence[RayOptions]],
        position: Point,
        direction: Point = Point(1.0, 0.0)
    ) -> LightObject:
        return self.add(create_light_object(ray_config, position, direction))

    def remove(
        self,
        targets: Union[str, BaseSceneObj, Iterable[Union[str, BaseSceneObj]]]
    ) -> List[BaseSceneObj]:
        """
        Remove objects (given by id or by object) and record the removal.

        Returns:
            The removed objects. Nothing is recorded when ``targets`` is empty.

        Raises:
            ValueError: If any target is not in the scene.
        """
        if isinstance(targets, (str, BaseSceneObj)):
            targets = [targets]
        ids = set()
        for target in targets:
            obj_id = target.id if isinstance(target, BaseSceneObj) else target
            self._require(obj_id)
            ids.add(obj_id)
        if not ids:
            return []

        entries = [(i, obj) for i, obj in enumerate(self.objs) if obj.id in ids]
        self._detach(ids)
        self.history.push(RemoveAction(entries))
        return [obj for _, obj in entries]

    def _detach(self, ids: Set[str]) -> None:
        self.objs = [obj for obj in self.objs if obj.id not in ids]
        self.selected_ids -= ids

    def clear(self) -> None:
        """Remove every object, the selection and the history."""
        self.objs = []
        self.selected_ids = set()
        self.history.clear()

    # ------------------------------------------------------------------
    # Transform batches
    # ------------------------------------------------------------------

    def start_transform(self, ids: Iterable[str]) -> int:
        """
        Open a transform batch over the given objects.

        The current transform of each object is snapshotted as both the old
        and the new state. The caller then mutates the live transforms and
        closes the batch with ``end_transform``.

        Returns:
            Index of the batch action, to be passed to ``end_transform``.

        Raises:
            RuntimeError: If another batch is still in progress.
            ValueError: If an id is not in the scene.
        """
        if self.history.is_in_progress:
            raise RuntimeError("A transform is already in progress")
        records = []
        for obj_id in ids:
            obj = self._require(obj_id)
            records.append(TransformRecord(obj_id, obj.transform.clone(), obj.transform.clone()))
        index = self.history.push(TransformAction(records))
        self.history.in_progress_index = index
        return index

    def end_transform(self, index: int) -> None:
        """
        Close the batch opened by ``start_transform``, capturing the final transforms.
        Lenses get their frame width refitted to the profile first.

        Raises:
            ValueError: If ``index`` is not the batch in progress.
        """
        if index != self.history.in_progress_index:
            raise ValueError(
                f"Transform {index} is not in progress "
                f"(in progress: {self.history.in_progress_index})"
            )
        action = self.history.past[index]
        for record in action.records:
            obj = self.get_object_by_id(record.obj_id)
            if obj is not None:
                if isinstance(obj, LensObject):
                    obj.fit_frame()
                record.new = obj.transform.clone()
        self.history.in_progress_index = None

    def is_transform_in_progress(self) -> bool:
        return self.history.is_in_progress

    # ------------------------------------------------------------------
    # Undo / redo
    # ------------------------------------------------------------------

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def undo(self) -> bool:
        """
        Revert the most recent action.

        Returns:
            True if an action was reverted, False when there is nothing to
            undo or a transform is in progress.
        """
        if not self.can_undo():
            return False
        action = self.history.past.pop()
        self._revert(action)
        self.history.future.append(action)
        return True

    def redo(self) -> bool:
        """
        Re-apply the most recently undone action.

        Returns:
            True if an action was re-applied, False otherwise.
        """
        if not self.can_redo():
            return False
        action = self.history.future.pop()
        self._apply(action)
        self.history.past.append(action)
        return True

    def _apply(self, action: SceneAction) -> None:
        if isinstance(action, AddAction):
            self.objs.append(action.obj)
        elif isinstance(action, RemoveAction):
            self._detach({obj.id for obj in action.objects})
        else:
            self._set_transforms(action, use_new=True)

    def _revert(self, action: SceneAction) -> None:
        if isinstance(action, AddAction):
            self._detach({action.obj.id})
        elif isinstance(action, RemoveAction):
            for index, obj in action.entries:
                self.objs.insert(index, obj)
        else:
            self._set_transforms(action, use_new=False)

    def _set_transforms(self, action: TransformAction, use_new: bool) -> None:
        for record in action.records:
            obj = self._require(record.obj_id)
            snapshot = record.new if use_new else record.old
            obj.transform = snapshot.clone()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_only(self, obj_id: str) -> None:
        self._require(obj_id)
        self.selected_ids = {obj_id}

    def add_to_selection(self, obj_id: str) -> None:
        self._require(obj_id)
        self.selected_ids.add(obj_id)

    def remove_from_selection(self, obj_id: str) -> None:
        self._require(obj_id)
        self.selected_ids.discard(obj_id)

    def is_object_selected(self, obj_id: str) -> bool:
        self._require(obj_id)
        return obj_id in self.selected_ids

    def deselect(self) -> None:
        self.selected_ids = set()

    def get_selected_objects(self) -> List[BaseSceneObj]:
        return [obj for obj in self.objs if obj.id in self.selected_ids]

    def __repr__(self) -> str:
        return f"Scene(objs={len(self.objs)}, selected={len(self.selected_ids)})"


def _frame_polygon(obj: BaseSceneObj) -> Polygon:
    corners = obj.transform.corners()
    return Polygon([corners[k].to_tuple() for k in ('tl', 'tr', 'br', 'bl')])
