"""
Theme engine: the public entry point of the renderer.

ThemeEngine binds one theme source and owns everything that is shared
between render passes: the filter and tag registries, the section schema
cache, the locale resolver and the preview globals. Every render call builds
its own Scope, so concurrent passes share no mutable state.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .config import EngineConfig, load_engine_config
from .errors import LQUserError
from .filters import create_filter_registry
from .locale import LocaleResolver
from .page import PageAssembler, RenderedDocument, build_preview_globals, section_wrapper
from .scope import Scope
from .sections import SchemaCache, SectionInfo, SectionRenderer, SectionSchema, default_settings, validate_settings
from .template import RenderContext, create_template_processor
from .theme import FilesystemThemeSource, ThemeSource, load_jsonc, sanitize_name
from .values import Value, as_dict

logger = logging.getLogger(__name__)

SETTINGS_SCHEMA_PATH = "config/settings_schema.json"
SETTINGS_DATA_PATH = "config/settings_data.json"


def _load_json_file(source: ThemeSource, path: str) -> Any:
    text = source.get_file(path)
    if text is None:
        return None
    try:
        return load_jsonc(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Malformed JSON in '{path}': {e}")
        return None


def load_theme_settings(source: ThemeSource) -> Dict[str, Value]:
    """
    Theme settings exposed as ``settings``.

    Defaults come from config/settings_schema.json; the ``current`` values of
    config/settings_data.json are merged over them. A string ``current`` names
    a preset in ``presets``.
    """
    result: Dict[str, Value] = {}

    schema = _load_json_file(source, SETTINGS_SCHEMA_PATH)
    if isinstance(schema, list):
        for group in schema:
            if isinstance(group, dict) and isinstance(group.get("settings"), list):
                result.update(default_settings([s for s in group["settings"] if isinstance(s, dict)]))

    data = as_dict(_load_json_file(source, SETTINGS_DATA_PATH))
    current = data.get("current")
    if isinstance(current, str):
        current = as_dict(data.get("presets")).get(current)
    elif current is None:
        current = as_dict(data.get("presets")).get("Default")
    result.update(as_dict(current))

    return result


def template_object(template_name: str) -> Dict[str, Optional[str]]:
    """The ``template`` global: product.alternate -> name product, suffix alternate."""
    directory, _, base = template_name.rpartition("/")
    name, _, suffix = base.partition(".")
    return {"name": name, "suffix": suffix or None, "directory": directory or None}


class ThemeEngine:
    """
    Renders sections and pages of one bound theme.

    Also serves as the theme handler of the template processor: the
    ``section`` and ``sections`` tags and snippet loading call back into it.
    """

    def __init__(self, source: ThemeSource, config: Optional[EngineConfig] = None):
        """
        Args:
            source: Theme files
            config: Engine configuration (defaults when omitted)
        """
        self.config = config or EngineConfig()
        self._bind(source)

    @classmethod
    def from_directory(cls, root: Path) -> "ThemeEngine":
        """
        Engine for a theme directory, configured from its lq.yaml.

        Raises:
            ThemeNotFoundError: The directory does not exist
            ThemeConfigError: lq.yaml is invalid
        """
        root = Path(root)
        source = FilesystemThemeSource(root)
        return cls(source, load_engine_config(root))

    def _bind(self, source: ThemeSource) -> None:
        """Build every per-theme component for a source."""
        self.source = source

        # Locales
        self.locales = LocaleResolver.from_source(source, self.config.default_locale)
        self.locale = self.locales.default_locale or "en"

        # Template processor with filters bound to this engine
        self.filters = create_filter_registry(
            self.config,
            lambda key, subs: self.locales.translate(key, self.locale, subs),
        )
        self.processor = create_template_processor(self.filters)
        self.processor.set_theme_handler(self)

        # Sections and pages
        self.schemas = SchemaCache(source)
        self.sections = SectionRenderer(source, self.schemas, self.processor)
        self.assembler = PageAssembler(source, self.sections, self.processor)

        # Preview globals
        self.theme_settings = load_theme_settings(source)
        self.globals = build_preview_globals(self.config, self.theme_settings, self.locale)

        logger.debug(f"Bound theme source {source!r} (locale: {self.locale})")

    def rebind(self, source: ThemeSource) -> None:
        """
        Bind another theme source.

        Drops the schema cache and the parsed templates of the previous source.
        """
        self._bind(source)

    # ---- render passes ----

    def new_context(self, template_name: str = "index", variables: Optional[Mapping[str, Any]] = None) -> RenderContext:
        """
        Context of a fresh top-level render pass.

        Args:
            template_name: Page template the pass renders for (the ``template`` global)
            variables: Extra variables of the base frame
        """
        # template is a global of the pass: sections and render see it too
        pass_globals: Dict[str, Any] = dict(self.globals)
        pass_globals["template"] = template_object(template_name)
        return RenderContext(
            scope=Scope(pass_globals, frame=dict(variables or {})),
            template_name=template_name,
            max_depth=self.config.max_render_depth,
        )

    def render_section(
        self,
        section_type: str,
        instance: Optional[Mapping[str, Any]] = None,
        template_name: str = "index",
    ) -> str:
        """
        Live preview of a single section.

        Args:
            section_type: Section type (file name in sections/)
            instance: Section data: id, settings, blocks, block_order, disabled
            template_name: Page template the section is previewed on

        Returns:
            Section HTML without the page wrapper
        """
        return self.sections.render(section_type, instance, self.new_context(template_name))

    def render_document(self, template_name: str = "index", strict: bool = False) -> RenderedDocument:
        """
        Full page render with the list of emitted section ids.

        Raises:
            DocumentError: With strict=True when the template document is not valid JSON
        """
        return self.assembler.render_page(template_name, self.new_context(template_name), strict)

    def render_page(self, template_name: str = "index", strict: bool = False) -> str:
        """Full page HTML for a template name."""
        return self.render_document(template_name, strict).html

    def render_string(self, text: str, variables: Optional[Mapping[str, Any]] = None,
                      template_name: str = "inline") -> str:
        """Render arbitrary template text in a fresh pass."""
        render_ctx = replace(self.new_context(variables=variables), template_name=template_name)
        return self.processor.render_text(text, render_ctx)

    # ---- locales ----

    def translate(self, key: str, locale: Optional[str] = None, **substitutions: Value) -> str:
        return self.locales.translate(key, locale or self.locale, substitutions)

    # ---- schemas ----

    def section_schema(self, section_type: str) -> Optional[SectionSchema]:
        return self.schemas.get(sanitize_name(section_type))

    def list_sections(self) -> List[SectionInfo]:
        return self.schemas.list_sections()

    def validate_settings(self, section_type: str, settings: Mapping[str, Any]) -> List[str]:
        """
        Check section settings against the schema.

        Raises:
            LQUserError: The section type does not exist
        """
        schema = self.section_schema(section_type)
        if schema is None:
            raise LQUserError(f"Section not found: {section_type}")
        return validate_settings(schema, dict(settings))

    # ---- theme handler ----

    def load_template(self, path: str) -> Optional[str]:
        return self.source.get_file(path)

    def render_section_ref(self, name: str, render_ctx: RenderContext) -> str:
        """{% section 'name' %}: schema defaults only, wrapped like a page section."""
        section_id = sanitize_name(name)
        inner = self.sections.render(name, {"id": section_id}, render_ctx)
        return section_wrapper(section_id, inner)

    def render_section_group(self, name: str, render_ctx: RenderContext) -> str:
        return self.assembler.render_group(name, render_ctx)


__all__ = ["ThemeEngine", "load_theme_settings", "template_object"]
