"""Diet Session - Ties the core store to the stored document.

Loads the document once, hands out the store and catalog, and writes the
whole document back after every mutation. A mutation whose write fails is
rolled back, so memory never holds changes the file does not.
"""

import logging

from ..core.catalog import DEFAULT_FOOD_DATABASE, InMemoryFoodCatalog
from ..core.models import DietState, ExportBundle, NutritionGoals
from ..core.store import DietPlanStore
from .storage import JsonFileStorage


logger = logging.getLogger(__name__)


def _catalog_for(bundle: ExportBundle) -> InMemoryFoodCatalog:
    foods = bundle.food_database if bundle.food_database is not None else DEFAULT_FOOD_DATABASE
    return InMemoryFoodCatalog(foods)


class DietSession:
    """Process-wide application state backed by JsonFileStorage.

    The stored document is the only source of truth at load time. If it
    cannot be read, the session refuses to start rather than overwrite it
    with defaults.
    """

    def __init__(self, storage: JsonFileStorage) -> None:
        bundle = storage.load()
        if bundle is None:
            raise RuntimeError(f"Could not load stored document at {storage.path}")

        self.storage = storage
        self._bundle = bundle
        self.store = DietPlanStore(bundle.diet_state())
        self.catalog = _catalog_for(bundle)

    @property
    def goals(self) -> NutritionGoals:
        return self._bundle.nutrition_goals

    def set_goals(self, goals: NutritionGoals) -> bool:
        previous = self._bundle
        self._bundle = self._bundle.model_copy(update={"nutrition_goals": goals})
        if self.persist():
            return True
        self._bundle = previous
        return False

    def export_bundle(self) -> ExportBundle:
        """Current document, with the diet state taken from the store."""
        state = self.store.snapshot()
        return self._bundle.model_copy(
            update={"diet_plan": state.template, "daily_diet_logs": dict(state.overrides)}
        )

    def import_bundle(self, bundle: ExportBundle) -> bool:
        """Replace everything with an imported document. Nothing is merged."""
        logger.info(
            "Importing document with %d explicit days", len(bundle.daily_diet_logs)
        )
        state = bundle.diet_state()
        previous = (self._bundle, self.store.snapshot(), self.catalog)

        self._bundle = bundle
        self.store.load(state)
        self.catalog = _catalog_for(bundle)
        if self.persist():
            return True

        self._bundle, previous_state, self.catalog = previous
        self.store.load(previous_state)
        return False

    def commit(self, previous: DietState) -> bool:
        """Persist the store, or restore it to previous if the write fails.

        Args:
            previous: Snapshot taken before the mutation being saved

        Returns:
            True if the document was written
        """
        if self.persist():
            return True
        logger.warning("Save failed, discarding unsaved change")
        self.store.load(previous)
        return False

    def persist(self) -> bool:
        """Write the current document to storage."""
        return self.storage.save(self.export_bundle())
