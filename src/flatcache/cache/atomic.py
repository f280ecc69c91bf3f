# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""File primitives shared by value files and options files.

Every write goes to ``<name>.<random hex>.tmp`` opened create-exclusive in
the target directory and is then renamed over ``<name>``. The rename is
the commit point: a reader sees the old file or the new one, never a
partial write. A process killed before the rename leaves an orphaned temp
file behind and the live file untouched.
"""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

from flatcache.cache.exceptions import CacheIOError, CodecError
from flatcache.cache.types import TMP_SUFFIX

logger = logging.getLogger(__name__)


def temp_path_for(target: Path) -> Path:
    """Return a fresh, collision-resistant temp path next to *target*."""
    return target.with_name(f"{target.name}.{uuid.uuid4().hex}{TMP_SUFFIX}")


def atomic_write(target: Path, text: str) -> None:
    """Atomically replace *target* with *text*.

    Raises:
        CodecError: *text* cannot be encoded as UTF-8. Nothing is written.
        CacheIOError: the temp file could not be created or written, or
            the rename failed. The temp file is removed in that case;
            *target* keeps its previous contents.
    """
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise CodecError(f"Cannot encode document for '{target.name}' as UTF-8: {exc}") from exc

    tmp = temp_path_for(target)
    created = False
    try:
        with open(tmp, "xb") as fh:
            created = True
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, target)
    except OSError as exc:
        if created:
            _discard(tmp)
        raise CacheIOError(f"Failed to write cache file '{target}': {exc}", path=str(target)) from exc
    except BaseException:
        if created:
            _discard(tmp)
        raise


def remove_file(path: Path) -> bool:
    """Delete *path*; return False if it was already gone."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise CacheIOError(f"Failed to delete cache file '{path}': {exc}", path=str(path)) from exc
    return True


def _discard(tmp: Path) -> None:
    try:
        tmp.unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not remove temp file '%s'", tmp)
