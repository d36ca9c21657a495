"""Pydantic schema of the snapshot document.

The document mirrors World state field for field, so decoding and validation
happen in one step and anything that does not fit the schema is rejected
before a World is built.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ctrlxt.core.entity.models import Entity, RelationTag, StateSlot
from ctrlxt.core.time import TimeState
from ctrlxt.core.types import Vector3
from ctrlxt.storage.local import LocalEntityStore
from ctrlxt.tracing.bus import EventBus
from ctrlxt.world.models import Marker, WorldConfiguration, ZeroPoint
from ctrlxt.world.world import World

FORMAT_VERSION = 1


class _Strict(BaseModel):
    # Non-finite floats are written as the Infinity / NaN constants, not null
    model_config = ConfigDict(extra="forbid", ser_json_inf_nan="constants")


class Vector3Model(_Strict):
    x: float
    y: float
    z: float

    @classmethod
    def from_vector(cls, vector: Vector3) -> Vector3Model:
        return cls(x=vector.x, y=vector.y, z=vector.z)

    def to_vector(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)


class RelationModel(_Strict):
    active: bool
    linked_ids: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _active_has_links(self) -> RelationModel:
        if self.active and not self.linked_ids:
            raise ValueError("Active relation tag must list at least one id")
        return self


class StateSlotModel(_Strict):
    values: list[Any] = Field(min_length=2)
    index: int


class EntityModel(_Strict):
    id: str = Field(min_length=1)
    properties: dict[str, Any] = Field(default_factory=dict)
    relation: RelationModel | None = None
    state_slot: StateSlotModel | None = None

    @classmethod
    def from_entity(cls, entity: Entity) -> EntityModel:
        relation = entity.relation
        slot = entity.state_slot
        return cls(
            id=entity.id,
            properties=entity.properties,
            relation=(
                RelationModel(active=relation.active, linked_ids=relation.linked_ids)
                if relation is not None
                else None
            ),
            state_slot=(
                StateSlotModel(values=slot.values, index=slot.index) if slot is not None else None
            ),
        )

    def to_entity(self) -> Entity:
        return Entity(
            id=self.id,
            properties=dict(self.properties),
            relation=(
                RelationTag(active=self.relation.active, linked_ids=list(self.relation.linked_ids))
                if self.relation is not None
                else None
            ),
            state_slot=(
                StateSlot(values=list(self.state_slot.values), index=self.state_slot.index)
                if self.state_slot is not None
                else None
            ),
        )


class MarkerModel(_Strict):
    id: str
    coordinates: Vector3Model
    time_state: TimeState


class ConfigurationModel(_Strict):
    composition: str
    processing_model: str
    data_sources: list[str] = Field(default_factory=list)
    spectrum_integrity: dict[str, str] = Field(default_factory=dict)


class ZeroPointModel(_Strict):
    frequency: float
    coordinates: Vector3Model


class WorldDocument(_Strict):
    """Complete, versioned encoding of a World."""

    version: Literal[1] = FORMAT_VERSION
    name: str | None = None
    dimensions: Vector3Model
    configuration: ConfigurationModel
    entities: list[EntityModel] = Field(default_factory=list)
    markers: list[MarkerModel] = Field(default_factory=list)
    time_state: TimeState = TimeState.PLAY
    time_speed: float = Field(default=1.0, gt=0, allow_inf_nan=False)
    zero_point: ZeroPointModel

    @model_validator(mode="after")
    def _unique_entity_ids(self) -> WorldDocument:
        ids = [entity.id for entity in self.entities]
        if len(ids) != len(set(ids)):
            raise ValueError("Entity ids must be unique")
        return self

    @model_validator(mode="after")
    def _speed_matches_state(self) -> WorldDocument:
        if not self.time_state.uses_speed and self.time_speed != 1.0:
            raise ValueError(f"Speed must be 1 in {self.time_state.value}, got {self.time_speed}")
        return self

    @classmethod
    def from_world(cls, world: World) -> WorldDocument:
        configuration = world.configuration
        return cls(
            name=world.name,
            dimensions=Vector3Model.from_vector(world.dimensions),
            configuration=ConfigurationModel(
                composition=configuration.composition,
                processing_model=configuration.processing_model,
                data_sources=list(configuration.data_sources),
                spectrum_integrity=dict(configuration.spectrum_integrity),
            ),
            entities=[EntityModel.from_entity(entity) for entity in world],
            markers=[
                MarkerModel(
                    id=marker.id,
                    coordinates=Vector3Model.from_vector(marker.coordinates),
                    time_state=marker.time_state,
                )
                for marker in world.markers
            ],
            time_state=world.time_state,
            time_speed=world.time_speed,
            zero_point=ZeroPointModel(
                frequency=world.zero_point.frequency,
                coordinates=Vector3Model.from_vector(world.zero_point.coordinates),
            ),
        )

    def to_world(self, events: EventBus | None = None) -> World:
        return World(
            self.dimensions.to_vector(),
            WorldConfiguration.build(
                self.configuration.composition,
                self.configuration.processing_model,
                self.configuration.data_sources,
                self.configuration.spectrum_integrity,
            ),
            name=self.name,
            store=LocalEntityStore(entity.to_entity() for entity in self.entities),
            events=events,
            time_state=self.time_state,
            time_speed=self.time_speed,
            markers=[
                Marker(
                    id=marker.id,
                    coordinates=marker.coordinates.to_vector(),
                    time_state=marker.time_state,
                )
                for marker in self.markers
            ],
            zero_point=ZeroPoint(
                frequency=self.zero_point.frequency,
                coordinates=self.zero_point.coordinates.to_vector(),
            ),
        )
