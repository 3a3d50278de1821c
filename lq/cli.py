from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .engine import ThemeEngine
from .errors import LQUserError
from .jsonic import dumps as jdumps
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lq",
        description="Liquid theme preview (offline section and page renderer)",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--theme",
        default=".",
        metavar="DIR",
        help="корень темы (layout/, templates/, sections/, snippets/, locales/, config/)",
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help="подробный лог (DEBUG) в stderr",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="HTML страницы или секции")
    sp_render.add_argument("kind", choices=["page", "section"], help="что рендерить")
    sp_render.add_argument("name", help="имя шаблона (index, product, ...) или тип секции")
    sp_render.add_argument(
        "--settings",
        metavar="JSON",
        help="данные секции: объект настроек или {id, settings, blocks, block_order}",
    )
    sp_render.add_argument(
        "--strict",
        action="store_true",
        help="ошибка JSON документа шаблона завершает команду вместо диагностики в HTML",
    )

    sp_list = sub.add_parser("list", help="Списки сущностей (JSON)")
    sp_list.add_argument("what", choices=["sections", "locales"], help="что вывести")

    sp_translate = sub.add_parser("translate", help="Перевод ключа локали")
    sp_translate.add_argument("key", help="ключ вида general.cart.title")
    sp_translate.add_argument("--locale", help="локаль (по умолчанию - локаль темы)")
    sp_translate.add_argument(
        "--arg",
        action="append",
        metavar="NAME=VALUE",
        help="подстановка {{ NAME }} (можно указать несколько)",
    )

    sp_validate = sub.add_parser("validate", help="Проверка настроек секции по схеме (JSON)")
    sp_validate.add_argument("type", help="тип секции")
    sp_validate.add_argument("--settings", metavar="JSON", required=True, help="объект настроек")

    return p


def _parse_json_object(text: Optional[str], option: str) -> Dict[str, Any]:
    """Разбирает JSON-объект из аргумента командной строки."""
    if not text:
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {option}: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"{option} must be a JSON object")
    return data


def _section_instance(data: Dict[str, Any]) -> Dict[str, Any]:
    """Голый объект настроек превращается в {settings: ...}."""
    if any(key in data for key in ("settings", "blocks", "block_order", "disabled", "id")):
        return data
    return {"settings": data}


def _parse_args(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Парсит список NAME=VALUE в словарь подстановок."""
    result: Dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ValueError(f"Invalid argument format '{pair}'. Expected 'NAME=VALUE'")
        name, value = pair.split("=", 1)
        result[name.strip()] = value
    return result


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(ns.verbose))

    try:
        engine = ThemeEngine.from_directory(Path(ns.theme))

        if ns.cmd == "render":
            if ns.kind == "page":
                html_text = engine.render_page(ns.name, strict=bool(ns.strict))
            else:
                instance = _section_instance(_parse_json_object(ns.settings, "--settings"))
                html_text = engine.render_section(ns.name, instance)
            sys.stdout.write(html_text)
            return 0

        if ns.cmd == "list":
            data: Dict[str, Any]
            if ns.what == "sections":
                data = {"sections": [info.to_dict() for info in engine.list_sections()]}
            elif ns.what == "locales":
                data = {"locales": engine.locales.available, "default": engine.locale}
            else:
                raise ValueError(f"Unknown list target: {ns.what}")
            sys.stdout.write(jdumps(data))
            return 0

        if ns.cmd == "translate":
            text = engine.translate(ns.key, ns.locale, **_parse_args(ns.arg))
            sys.stdout.write(text + "\n")
            return 0

        if ns.cmd == "validate":
            settings = _parse_json_object(ns.settings, "--settings")
            warnings = engine.validate_settings(ns.type, settings)
            sys.stdout.write(jdumps({"type": ns.type, "valid": not warnings, "warnings": warnings}))
            return 0

    except LQUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
