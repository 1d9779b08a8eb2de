"""Actors and the components attached to them."""

from __future__ import annotations

from typing import Iterable, TypeVar

import numpy as np

from .transform import Transform

T = TypeVar("T", bound="Component")


class Component:
    """Behaviour attached to an actor; subclasses override the hooks."""

    def __init__(self) -> None:
        self.name: str = type(self).__name__
        self.actor: Actor | None = None
        self.enabled: bool = True

    def start(self) -> None:
        """Called once before the first frame."""

    def update(self) -> None:
        """Called every rendered frame."""

    def fixed_update(self) -> None:
        """Called every physics frame while enabled."""

    def on_destroy(self) -> None:
        """Called when the game finishes."""

    def transform(self) -> Transform:
        """The owning actor's transform, or a detached default one."""
        if self.actor is not None:
            return self.actor.transform
        return Transform(None)


class Actor:
    """A named object holding a transform and a list of components."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.transform = Transform(self)
        self.components: list[Component] = []

    def initialize(self, position, scale=None, rotation=None) -> None:
        self.transform.position = np.asarray(position, dtype=float).copy()
        self.transform.scale = (
            np.ones(3) if scale is None else np.asarray(scale, dtype=float).copy()
        )
        self.transform.rotation = (
            np.zeros(3) if rotation is None else np.asarray(rotation, dtype=float).copy()
        )

    def start(self) -> None:
        for component in self.components:
            component.start()

    def update(self) -> None:
        for component in self.components:
            component.update()

    def fixed_update(self) -> None:
        for component in self.components:
            if component.enabled:
                component.fixed_update()

    def on_destroy(self) -> None:
        for component in self.components:
            component.on_destroy()

    def add_component(self, component: Component) -> None:
        component.actor = self
        self.components.append(component)

    def add_components(self, components: Iterable[Component]) -> None:
        for component in components:
            self.add_component(component)

    def get_component(self, component_type: type[T]) -> T | None:
        """First component that is an instance of ``component_type``."""
        return next((c for c in self.components if isinstance(c, component_type)), None)

    def get_components(self, component_type: type[T]) -> list[T]:
        return [c for c in self.components if isinstance(c, component_type)]