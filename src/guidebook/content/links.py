"""
Link classification and resolution.

Internal links between guides are written the way a reader sees them on
the site, so several spellings must land on the same file::

    [Hooks](hooks.md)              relative, with suffix
    [Hooks](./hooks)               relative, without suffix
    [React](/guides/react/)        site-rooted directory -> guides/react/index.md
    [Hooks](/docs/guides/react/hooks.html#rules)
                                   site prefix + rendered suffix + fragment

Resolution order for a target path ``p`` (after stripping query, fragment
and the site prefix): ``p`` itself if it is a file, ``p.md``, ``p`` with an
``.html`` suffix swapped for ``.md``, ``p/index.md``, ``p/README.md``.
A target that climbs out of the content root never resolves. Site-rooted
targets that are not found in the content root are also looked up in the
configured static directories (where images usually live).
"""

from __future__ import annotations

import os
import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from urllib.parse import unquote

SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
MAIL_SCHEMES = ("mailto:", "tel:")


class LinkKind(str, Enum):
    """What a link points at."""

    EXTERNAL = "external"
    MAIL = "mail"
    ANCHOR = "anchor"
    INTERNAL = "internal"
    EMPTY = "empty"


@dataclass(frozen=True)
class LinkResolution:
    """Outcome of resolving one link target.

    Attributes:
        target: The link target as written.
        kind: Classification of the target.
        path: File the link lands on (internal and anchor links only).
        fragment: ``#fragment`` without the hash, if any.
        reason: Why an internal link did not resolve.
    """

    target: str
    kind: LinkKind
    path: Path | None = None
    fragment: str | None = None
    reason: str | None = None

    @property
    def checked(self) -> bool:
        return self.kind in (LinkKind.INTERNAL, LinkKind.ANCHOR)

    @property
    def broken(self) -> bool:
        return self.checked and self.path is None

    @property
    def status(self) -> str:
        if not self.checked:
            return "skipped"
        return "broken" if self.broken else "ok"


def classify_link(target: str) -> LinkKind:
    """Classify a link target without touching the filesystem."""
    target = target.strip()
    if not target:
        return LinkKind.EMPTY
    lowered = target.lower()
    if lowered.startswith(MAIL_SCHEMES):
        return LinkKind.MAIL
    if target.startswith("//") or SCHEME_RE.match(target):
        return LinkKind.EXTERNAL
    if target.startswith(("#", "?")):
        return LinkKind.ANCHOR
    return LinkKind.INTERNAL


def split_target(target: str) -> tuple[str, str | None]:
    """Split a target into its path part and fragment (query dropped)."""
    path, _, fragment = target.partition("#")
    path = path.split("?", 1)[0]
    return unquote(path), (unquote(fragment) if fragment else None)


def _strip_site_prefix(path: str, site_prefix: str) -> str:
    prefix = "/" + site_prefix.strip("/") if site_prefix.strip("/") else ""
    if prefix and (path == prefix or path.startswith(prefix + "/")):
        return path[len(prefix):] or "/"
    return path


def _candidates(base: Path) -> list[Path]:
    candidates = [base, base.with_name(base.name + ".md")]
    if base.suffix == ".html":
        candidates.append(base.with_suffix(".md"))
    candidates.extend([base / "index.md", base / "README.md"])
    return candidates


def _within(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
    except ValueError:
        return False
    return True


def resolve_link(
    source: Path,
    target: str,
    root: Path,
    *,
    site_prefix: str = "",
    static_roots: Sequence[Path] = (),
) -> LinkResolution:
    """Resolve ``target`` as written in the document at ``source``.

    Args:
        source: Path of the document containing the link.
        target: Link target as written.
        root: Content root; ``/``-rooted targets resolve from here.
        site_prefix: URL prefix the site is served under (e.g. ``/docs``),
            removed from ``/``-rooted targets before resolution.
        static_roots: Extra directories searched for ``/``-rooted targets
            that are not in the content root (images, downloads).
    """
    target = target.strip()
    kind = classify_link(target)
    if kind in (LinkKind.EXTERNAL, LinkKind.MAIL, LinkKind.EMPTY):
        return LinkResolution(target=target, kind=kind)

    path_part, fragment = split_target(target)
    if kind is LinkKind.ANCHOR:
        return LinkResolution(target=target, kind=kind, path=source, fragment=fragment)

    root = root.resolve()
    site_rooted = path_part.startswith("/")
    if site_rooted:
        path_part = _strip_site_prefix(path_part, site_prefix)
        base = root / path_part.lstrip("/")
    else:
        base = source.resolve().parent / path_part

    base = Path(os.path.normpath(base))
    if not _within(base, root):
        return LinkResolution(
            target=target, kind=kind, fragment=fragment, reason="points outside the content root"
        )

    for candidate in _candidates(base):
        if _within(candidate, root) and candidate.is_file():
            return LinkResolution(target=target, kind=kind, path=candidate, fragment=fragment)

    if site_rooted:
        for static_root in static_roots:
            asset = Path(os.path.normpath(static_root.resolve() / path_part.lstrip("/")))
            if _within(asset, static_root.resolve()) and asset.is_file():
                return LinkResolution(target=target, kind=kind, path=asset, fragment=fragment)

    return LinkResolution(target=target, kind=kind, fragment=fragment, reason="no such file")


__all__ = [
    "LinkKind",
    "LinkResolution",
    "classify_link",
    "resolve_link",
    "split_target",
]
