"""
Museum progress pipeline.

One call performs the full fetch-and-reconcile cycle for a player:
1. Fetch the player's profiles
2. Select the active profile
3. Fetch the profile's museum
4. Log the raw museum payload (best effort)
5. Extract donations
6. Reconcile against the catalog
"""

import logging

from museum_tracker import api
from museum_tracker.catalog import Catalog
from museum_tracker.config import Settings, get_settings
from museum_tracker.donations import extract_donations
from museum_tracker.exceptions import ProfileNotFoundError
from museum_tracker.models import Counts, MissingItem, MuseumProgress
from museum_tracker.profiles import select_profile
from museum_tracker.reconcile import reconcile
from museum_tracker.request_log import write_request_log

log = logging.getLogger(__name__)


class MuseumService:
    def __init__(self, catalog: Catalog, settings: Settings | None = None):
        self._catalog = catalog
        self._settings = settings or get_settings()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def get_progress(self, uuid: str, api_key: str) -> MuseumProgress:
        profiles_data = api.get_profiles(uuid, api_key)
        profile = select_profile(profiles_data.get("profiles"), uuid)
        if not isinstance(profile, dict) or not profile.get("profile_id"):
            raise ProfileNotFoundError(f"No profiles found for {uuid}")

        profile_id = str(profile["profile_id"])
        museum_data = api.get_museum(profile_id, api_key)

        if self._settings.log_requests:
            write_request_log(self._settings.log_dir, uuid, profile_id, museum_data)

        donations = extract_donations(museum_data, uuid, self._catalog.aliases)
        result = reconcile(self._catalog, donations)
        log.info(
            "Museum progress for %s (profile %s): %d donated, %d missing",
            uuid,
            profile_id,
            result.donated,
            len(result.missing),
        )

        return MuseumProgress(
            profile_id=profile_id,
            categories=[str(category) for category in result.categories],
            counts=Counts(
                donated=result.donated,
                total=result.total,
                completion_pct=result.completion_pct,
            ),
            missing=[MissingItem(category=m.category, name=m.name) for m in result.missing],
            hints=result.hints,
            raw=dict(museum_data),
        )
