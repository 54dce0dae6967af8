from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

FALLBACK_LOCALE = "ru"


@dataclass(frozen=True)
class CommandDescriptions:
    """Human-readable descriptions of the console commands for one language."""

    schedule: str
    changes: str
    help: str
    parse: str
    write: str
    show: str
    exit: str


LOCALE_DESCRIPTIONS: Mapping[str, CommandDescriptions] = {
    "en": CommandDescriptions(
        schedule="Begins schedule-reading process (requires prepared file)",
        changes="Begins changes-reading process (requires downloaded document)",
        help="Show context help for this application",
        parse="Begins basic parsing process (may be useful for debugging process)",
        write="Writes last gotten result value to file",
        show="Show last gotten result in the console (terminal)",
        exit="Exits from program",
    ),
    "zh": CommandDescriptions(
        schedule="开始读取课程表（需要准备好的文件）",
        changes="开始读取课程变更（需要已下载的文档）",
        help="显示本程序的帮助信息",
        parse="开始基本解析过程（可用于调试）",
        write="将最后得到的结果写入文件",
        show="在控制台（终端）中显示最后得到的结果",
        exit="退出程序",
    ),
    "ru": CommandDescriptions(
        schedule="Запуск процесса чтения расписания (требуется подготовленный файл)",
        changes="Запуск процесса чтения замен (требуется скачанный документ)",
        help="Показать контекстную справку по приложению",
        parse="Запуск базового процесса разбора (может быть полезно для отладки)",
        write="Записать последний полученный результат в файл",
        show="Показать последний полученный результат в консоли (терминале)",
        exit="Выйти из программы",
    ),
}


def get_descriptions(tag: str) -> CommandDescriptions:
    """Return descriptions for a locale tag such as ``en``, ``en_US`` or ``zh-CN``."""

    language = tag.replace("-", "_").split("_")[0].strip().lower()
    return LOCALE_DESCRIPTIONS.get(language, LOCALE_DESCRIPTIONS[FALLBACK_LOCALE])


__all__ = ["CommandDescriptions", "LOCALE_DESCRIPTIONS", "FALLBACK_LOCALE", "get_descriptions"]
