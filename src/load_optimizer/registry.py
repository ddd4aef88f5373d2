"""Stage registry: finds every concrete AdjustmentStage under ``load_optimizer.stages``."""

from __future__ import annotations

import importlib
import logging
import pkgutil

from load_optimizer.stages.base import AdjustmentStage

logger = logging.getLogger(__name__)


class StageRegistry:
    """Holds one instance per ``stage_id`` and hands them out in fold order.

    ``discover_stages`` imports every module below the stages package
    (``baseline/``, ``dampening/``, ``override/``) and instantiates the
    concrete stage classes defined there. A stage registered twice under the
    same id replaces the earlier one.
    """

    def __init__(self) -> None:
        self._stages: dict[str, AdjustmentStage] = {}

    def discover_stages(self) -> None:
        import load_optimizer.stages as stages_pkg

        for _finder, module_name, _is_pkg in pkgutil.walk_packages(
            stages_pkg.__path__, prefix=stages_pkg.__name__ + "."
        ):
            module = importlib.import_module(module_name)
            for stage_cls in self._stage_classes(module):
                self.register(stage_cls())

    @staticmethod
    def _stage_classes(module) -> list[type[AdjustmentStage]]:
        # Only classes defined in the module itself; imported bases are skipped
        return [
            attr
            for attr in vars(module).values()
            if isinstance(attr, type)
            and issubclass(attr, AdjustmentStage)
            and attr is not AdjustmentStage
            and not getattr(attr, "__abstractmethods__", None)
            and attr.__module__ == module.__name__
        ]

    def register(self, stage: AdjustmentStage) -> None:
        if stage.stage_id in self._stages:
            logger.debug("Replacing registered stage %s", stage.stage_id)
        self._stages[stage.stage_id] = stage

    def get(self, stage_id: str) -> AdjustmentStage | None:
        return self._stages.get(stage_id)

    def get_all_stages(self) -> list[AdjustmentStage]:
        """Stages sorted by tier, then by ``order`` within the tier."""
        return sorted(self._stages.values(), key=lambda s: (s.tier, s.order))

    @property
    def stage_ids(self) -> list[str]:
        return list(self._stages)
