"""
In-memory entity store for users, videos, categories and theme settings
"""

import itertools
import threading
from dataclasses import replace, asdict
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Any

import structlog

from videoshare.models import (
    User,
    Video,
    Category,
    ThemeSettings,
    PATCHABLE_VIDEO_FIELDS,
    ALL_CATEGORIES,
    DEFAULT_CATEGORIES,
)

logger = structlog.get_logger()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _newest_first(videos: Iterable[Video]) -> List[Video]:
    return sorted(videos, key=lambda video: (video.upload_date, video.id), reverse=True)


class MemoryStore:
    """
    Keyed collections with monotonically increasing integer ids.

    Lookups return None (or False for deletes) when an entity is missing;
    creates always succeed. Mutations are serialised by a re-entrant lock
    so sync handlers running in the threadpool cannot lose updates.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or utcnow
        self._lock = threading.RLock()

        self._users: Dict[int, User] = {}
        self._videos: Dict[int, Video] = {}
        self._categories: Dict[int, Category] = {}
        self._theme = ThemeSettings()

        self._user_ids = itertools.count(1)
        self._video_ids = itertools.count(1)
        self._category_ids = itertools.count(1)

    def seed(self, admin_username: str = "admin", admin_password: str = "admin123") -> None:
        """Create the default admin account and categories if they are missing"""
        if self.get_user_by_username(admin_username) is None:
            self.create_user(username=admin_username, password=admin_password, is_admin=True)
            logger.info("Default admin user created", username=admin_username)

        for name in DEFAULT_CATEGORIES:
            if self.get_category_by_name(name) is None:
                self.create_category(name=name)

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next(
            (user for user in self._users.values() if user.username == username),
            None
        )

    def create_user(self, username: str, password: str, is_admin: bool = False) -> User:
        with self._lock:
            user = User(id=next(self._user_ids), username=username, password=password, is_admin=is_admin)
            self._users[user.id] = user
            return user

    def list_users(self) -> List[User]:
        return list(self._users.values())

    def update_user_password(self, user_id: int, new_password: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = replace(user, password=new_password)
            self._users[user_id] = updated
            return updated

    # Videos

    def get_video(self, video_id: int) -> Optional[Video]:
        return self._videos.get(video_id)

    def list_videos(self) -> List[Video]:
        return _newest_first(self._videos.values())

    def list_videos_by_category(self, category: str) -> List[Video]:
        if category == ALL_CATEGORIES:
            return self.list_videos()
        return _newest_first(
            video for video in self._videos.values() if video.category == category
        )

    def search_videos(self, query: str) -> List[Video]:
        needle = query.lower()
        return _newest_first(
            video for video in self._videos.values()
            if needle in video.title.lower()
            or (video.description and needle in video.description.lower())
        )

    def create_video(self, **fields: Any) -> Video:
        fields.pop("id", None)
        fields.pop("views", None)
        fields.pop("upload_date", None)
        with self._lock:
            video = Video(
                id=next(self._video_ids),
                upload_date=self._clock(),
                views=0,
                **fields
            )
            self._videos[video.id] = video
            return video

    def update_video(self, video_id: int, patch: Dict[str, Any]) -> Optional[Video]:
        changes = {key: value for key, value in patch.items() if key in PATCHABLE_VIDEO_FIELDS}
        with self._lock:
            video = self._videos.get(video_id)
            if video is None:
                return None
            updated = replace(video, **changes)
            self._videos[video_id] = updated
            return updated

    def delete_video(self, video_id: int) -> bool:
        with self._lock:
            return self._videos.pop(video_id, None) is not None

    def increment_views(self, video_id: int) -> Optional[Video]:
        with self._lock:
            video = self._videos.get(video_id)
            if video is None:
                return None
            updated = replace(video, views=video.views + 1)
            self._videos[video_id] = updated
            return updated

    # Categories

    def list_categories(self) -> List[Category]:
        return list(self._categories.values())

    def get_category_by_name(self, name: str) -> Optional[Category]:
        return next(
            (category for category in self._categories.values() if category.name == name),
            None
        )

    def create_category(self, name: str) -> Category:
        with self._lock:
            category = Category(id=next(self._category_ids), name=name)
            self._categories[category.id] = category
            return category

    # Theme

    def get_theme(self) -> ThemeSettings:
        return self._theme

    def update_theme(self, theme: ThemeSettings) -> ThemeSettings:
        with self._lock:
            self._theme = replace(theme)
            logger.info("Theme settings updated", **asdict(self._theme))
            return self._theme
