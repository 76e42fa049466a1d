"""
Registry of item administration factories keyed by CAT model.

Custom CAT models register their factory under an explicit key; activities
select a model by that key. An activity without a model key uses the default
factory.
"""

import logging
from typing import Any, Dict, List, Optional

from adaptivequiz.core.itemadministration.base import ItemAdministrationFactory

logger = logging.getLogger(__name__)


class CatModelError(Exception):
    """Raised when a CAT model cannot be resolved or registered."""

    def __init__(  # noqa: D107
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            msg = f"{msg} (context: {ctx_str})"
        return msg


class ItemAdministrationFactoryRegistry:
    """Maps CAT model keys to item administration factories."""

    def __init__(self, default_factory: ItemAdministrationFactory):
        self._default_factory = default_factory
        self._factories: Dict[str, ItemAdministrationFactory] = {}

    def register(self, cat_model: str, factory: ItemAdministrationFactory) -> None:
        """
        Register the factory of a custom CAT model.

        Raises:
            CatModelError: If the key is empty, already registered, or the
                factory does not implement ItemAdministrationFactory.
        """
        if not cat_model or not cat_model.strip():
            raise CatModelError("CAT model key must be a non-empty string")
        if not isinstance(factory, ItemAdministrationFactory):
            raise CatModelError(
                "Factory must implement ItemAdministrationFactory",
                context={"cat_model": cat_model, "factory": type(factory).__name__},
            )
        if cat_model in self._factories:
            raise CatModelError(
                "Only one item administration factory per CAT model is expected",
                context={"cat_model": cat_model},
            )

        self._factories[cat_model] = factory
        logger.info(f"Registered item administration factory for CAT model '{cat_model}'")

    def resolve(self, cat_model: Optional[str]) -> ItemAdministrationFactory:
        """
        Get the factory for a CAT model key; None or empty selects the default.

        Raises:
            CatModelError: If no factory is registered under the key.
        """
        if not cat_model:
            return self._default_factory

        factory = self._factories.get(cat_model)
        if factory is None:
            raise CatModelError(
                "Item administration factory could not be found for the selected CAT model",
                context={"cat_model": cat_model, "registered": self.registered_models()},
            )
        return factory

    def registered_models(self) -> List[str]:
        return sorted(self._factories)
