"""Repository for guide content stored as a manifest plus rule files."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from fresha_style_guide.constants import GUIDE_MANIFEST_FILENAME, RULE_SUFFIX
from fresha_style_guide.errors import (
    MalformedContentError,
    MissingContentError,
    StyleGuideError,
)
from fresha_style_guide.guidelines.models import Category, Guide, Rule
from fresha_style_guide.guidelines.parser import parse_rule, serialize_rule
from fresha_style_guide.guidelines.schema import GUIDE_SCHEMA, validate_payload

logger = logging.getLogger(__name__)

BUNDLED_CONTENT_DIR = Path(__file__).resolve().parent.parent / "content"


class GuideRepository:
    def __init__(self, root: Path | None = None) -> None:
        self._root = root or BUNDLED_CONTENT_DIR

    @property
    def root(self) -> Path:
        return self._root

    @property
    def manifest_path(self) -> Path:
        return self._root / GUIDE_MANIFEST_FILENAME

    def category_dir(self, slug: str) -> Path:
        return self._root / slug

    def rule_path(self, slug: str, name: str) -> Path:
        return self.category_dir(slug) / f"{name}{RULE_SUFFIX}"

    def load_manifest(self) -> dict:
        if not self.manifest_path.exists():
            raise MissingContentError(self.manifest_path)
        try:
            payload = yaml.safe_load(self.manifest_path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as exc:
            raise MalformedContentError(
                f"not valid UTF-8: {exc.reason}", path=self.manifest_path
            ) from exc
        except yaml.YAMLError as exc:
            raise MalformedContentError(
                f"invalid YAML: {exc}", path=self.manifest_path
            ) from exc
        validate_payload(payload, GUIDE_SCHEMA, path=self.manifest_path)
        self._check_unique_categories(payload["categories"])
        return payload

    def load(self) -> Guide:
        manifest = self.load_manifest()
        categories = tuple(
            self._load_category(item) for item in manifest["categories"]
        )
        guide = Guide(
            title=manifest["title"],
            version=manifest["version"],
            overview=str(manifest.get("overview", "")).strip(),
            categories=categories,
        )
        logger.debug(
            "Loaded guide %s from %s (%d categories)",
            guide.version,
            self._root,
            len(categories),
        )
        return guide

    def load_errors(self) -> list[Exception]:
        """Collect every content error instead of stopping at the first one."""
        try:
            manifest = self.load_manifest()
        except StyleGuideError as exc:
            return [exc]

        errors: list[Exception] = []
        for item in manifest["categories"]:
            for name in item["rules"]:
                try:
                    self._load_rule(item["slug"], name)
                except StyleGuideError as exc:
                    errors.append(exc)
        return errors

    def save(self, guide: Guide) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        manifest = {
            "title": guide.title,
            "version": guide.version,
            "overview": guide.overview,
            "categories": [
                {
                    "name": category.name,
                    "slug": category.slug,
                    "overview": category.overview,
                    "rules": category.rule_names(),
                }
                for category in guide.categories
            ],
        }
        self.manifest_path.write_text(
            yaml.dump(
                manifest,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
                width=1000,
            ),
            encoding="utf-8",
        )
        for category in guide.categories:
            self.category_dir(category.slug).mkdir(parents=True, exist_ok=True)
            for rule in category.rules:
                self.rule_path(category.slug, rule.name).write_text(
                    serialize_rule(rule), encoding="utf-8"
                )

    def _load_category(self, item: dict) -> Category:
        rules = tuple(self._load_rule(item["slug"], name) for name in item["rules"])
        return Category(
            name=item["name"],
            slug=item["slug"],
            overview=str(item.get("overview", "")).strip(),
            rules=rules,
        )

    def _load_rule(self, slug: str, name: str) -> Rule:
        path = self.rule_path(slug, name)
        if not path.exists():
            raise MissingContentError(path)
        return parse_rule(path)

    def _check_unique_categories(self, categories: list[dict]) -> None:
        seen: set[str] = set()
        for item in categories:
            for key in (item["name"], item["slug"]):
                if key in seen:
                    raise MalformedContentError(
                        f"duplicate category: {key}", path=self.manifest_path
                    )
                seen.add(key)
