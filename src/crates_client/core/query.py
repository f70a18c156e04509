from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Sorting(Enum):
    """Sort orders accepted by the crates listing endpoint."""

    ALPHABETICAL = "alpha"
    ALL_TIME_DOWNLOADS = "downloads"
    RECENT_DOWNLOADS = "recent-downloads"
    RECENT_UPDATES = "recent-updates"
    NEWLY_ADDED = "new"

    @classmethod
    def from_str(cls, value: str) -> Optional["Sorting"]:
        """Parse a sort order from its wire value or a short alias (e.g. "rdl", "update")."""
        return _SORTING_ALIASES.get(value.strip().lower())


_SORTING_ALIASES: dict[str, Sorting] = {}
for _sort, _aliases in (
    (Sorting.ALPHABETICAL, ("alpha", "alphabet", "alphabetic", "alphabetical")),
    (Sorting.ALL_TIME_DOWNLOADS, ("downloads", "download", "dl", "all-time")),
    (Sorting.RECENT_DOWNLOADS, ("recent-downloads", "rdl", "new-downloads")),
    (Sorting.RECENT_UPDATES, ("recent-updates", "new-updates", "updates", "update", "rup")),
    (Sorting.NEWLY_ADDED, ("newly-added", "new", "newest", "latest")),
):
    for _alias in _aliases:
        _SORTING_ALIASES[_alias] = _sort


class Category(Enum):
    """Category slugs available on crates.io."""

    ACCESSIBILITY = "accessibility"
    ALGORITHMS = "algorithms"
    API_BINDINGS = "api-bindings"
    ASYNCHRONOUS = "asynchronous"
    AUTHENTICATION = "authentication"
    CACHING = "caching"
    COMMAND_LINE_INTERFACE = "command-line-interface"
    COMMAND_LINE_UTILITIES = "command-line-utilities"
    COMPILERS = "compilers"
    COMPRESSION = "compression"
    COMPUTER_VISION = "computer-vision"
    CONCURRENCY = "concurrency"
    CONFIG = "config"
    CRYPTOGRAPHY = "cryptography"
    DATABASE = "database"
    DATABASE_IMPLEMENTATIONS = "database-implementations"
    DATA_STRUCTURES = "data-structures"
    DATE_AND_TIME = "date-and-time"
    DEVELOPMENT_TOOLS = "development-tools"
    EMAIL = "email"
    EMBEDDED = "embedded"
    EMULATORS = "emulators"
    ENCODING = "encoding"
    EXTERNAL_FFI_BINDINGS = "external-ffi-bindings"
    FILESYSTEM = "filesystems"
    GAME_DEVELOPMENT = "game-development"
    GAME_ENGINES = "game-engines"
    GAMES = "games"
    GRAPHICS = "graphics"
    GUI = "gui"
    HARDWARE_SUPPORT = "hardware-support"
    INTERNATIONALIZATION = "internationalization"
    LOCALIZATION = "localization"
    MATHEMATICS = "mathematics"
    MEMORY_MANAGEMENT = "memory-management"
    MULTIMEDIA = "multimedia"
    NETWORK_PROGRAMMING = "network-programming"
    NO_STD = "no-std"
    OS = "os"
    PARSER_IMPLEMENTATIONS = "parser-implementations"
    PARSING = "parsing"
    RENDERING = "rendering"
    RUST_PATTERNS = "rust-patterns"
    SCIENCE = "science"
    SIMULATION = "simulation"
    TEMPLATE_ENGINE = "template-engine"
    TEXT_EDITORS = "text-editors"
    TEXT_PROCESSING = "text-processing"
    VALUE_FORMATTING = "value-formatting"
    VISUALIZATION = "visualization"
    WASM = "wasm"
    WEB_PROGRAMMING = "web-programming"

    @classmethod
    def from_str(cls, value: str) -> Optional["Category"]:
        """Parse a category from its slug or a short alias (e.g. "web", "gamedev", "db")."""
        return _CATEGORY_ALIASES.get(value.strip().lower())


# Extra aliases on top of each category's own slug.
_CATEGORY_EXTRA_ALIASES: dict[Category, tuple[str, ...]] = {
    Category.ACCESSIBILITY: ("access", "accessible"),
    Category.ALGORITHMS: ("algo", "algorithm", "algorithmic"),
    Category.API_BINDINGS: ("bindings", "api"),
    Category.ASYNCHRONOUS: ("async",),
    Category.AUTHENTICATION: ("auth", "authenticate"),
    Category.CACHING: ("cache",),
    Category.COMMAND_LINE_INTERFACE: ("cli",),
    Category.COMMAND_LINE_UTILITIES: ("util", "utility", "utilities"),
    Category.COMPILERS: ("compiler",),
    Category.COMPRESSION: ("compress",),
    Category.COMPUTER_VISION: ("vision",),
    Category.CONCURRENCY: ("concurrent",),
    Category.CONFIG: ("cfg", "conf"),
    Category.CRYPTOGRAPHY: ("crypto",),
    Category.DATABASE: ("db",),
    Category.DATABASE_IMPLEMENTATIONS: ("db-impl",),
    Category.DATA_STRUCTURES: ("struct", "structs", "structures"),
    Category.DATE_AND_TIME: ("date", "time", "datetime"),
    Category.DEVELOPMENT_TOOLS: ("dev-tools", "tools"),
    Category.EMAIL: ("mail",),
    Category.EMBEDDED: ("embed",),
    Category.EMULATORS: ("emulation", "emulate"),
    Category.ENCODING: ("encode", "encoders"),
    Category.EXTERNAL_FFI_BINDINGS: ("ffi",),
    Category.FILESYSTEM: ("filesystem", "fs"),
    Category.GAME_DEVELOPMENT: ("gamedev", "game-dev"),
    Category.GAME_ENGINES: ("game-engine", "engines"),
    Category.GAMES: ("game",),
    Category.GUI: ("ui",),
    Category.HARDWARE_SUPPORT: ("hardware",),
    Category.INTERNATIONALIZATION: ("i18n",),
    Category.LOCALIZATION: ("localizations",),
    Category.MATHEMATICS: ("maths", "math"),
    Category.MEMORY_MANAGEMENT: ("memory", "mem"),
    Category.MULTIMEDIA: ("media",),
    Category.NETWORK_PROGRAMMING: ("net", "network", "networking"),
    Category.NO_STD: ("nostd",),
    Category.OS: ("operating-system",),
    Category.PARSER_IMPLEMENTATIONS: ("parsers",),
    Category.PARSING: ("parse",),
    Category.RENDERING: ("render",),
    Category.RUST_PATTERNS: ("patterns",),
    Category.SCIENCE: ("scientific", "sci"),
    Category.SIMULATION: ("sim", "simulators"),
    Category.TEMPLATE_ENGINE: ("template-engines", "template"),
    Category.TEXT_EDITORS: ("editors",),
    Category.TEXT_PROCESSING: ("text", "processing"),
    Category.VALUE_FORMATTING: ("formatting",),
    Category.VISUALIZATION: ("visual", "vis", "visualize"),
    Category.WEB_PROGRAMMING: ("web",),
}

_CATEGORY_ALIASES: dict[str, Category] = {c.value: c for c in Category}
for _cat, _aliases in _CATEGORY_EXTRA_ALIASES.items():
    for _alias in _aliases:
        _CATEGORY_ALIASES[_alias] = _cat


_CATEGORY_KEYS = ("cat", "category")
_KEYWORD_KEYS = ("keyword", "key", "kw")
_PER_PAGE_KEYS = ("per-page", "per_page", "num")


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


@dataclass
class Query:
    """Options for a single crates listing request.

    Attributes:
        string: Free-text search passed to the API as ``q``.
        page: Page number, starting at 1.
        per_page: Number of results per page.
        keyword: Only match crates tagged with this keyword.
        category: Only match crates in this category.
        sort: Sort order applied by the API.
    """

    string: Optional[str] = None
    page: Optional[int] = None
    per_page: Optional[int] = 100
    keyword: Optional[str] = None
    category: Optional[Category] = None
    sort: Optional[Sorting] = None

    @classmethod
    def parse(cls, text: str) -> "Query":
        """Parse a human-readable query string.

        Tokens are separated by whitespace. Bare words form the search string;
        ``key=value`` tokens set options. Empty values, unknown aliases and
        unknown keys are ignored.

        Examples:
            >>> Query.parse("api cat=web sort=update").category
            <Category.WEB_PROGRAMMING: 'web-programming'>
            >>> Query.parse("net cat=gamedev sort=rdl num=10").per_page
            10
        """
        query = cls()
        words: list[str] = []
        for token in text.split():
            key, sep, value = token.partition("=")
            if not sep:
                words.append(token)
                continue
            if not value:
                continue
            key = key.lower()
            if key in _CATEGORY_KEYS:
                query.category = Category.from_str(value)
            elif key in _KEYWORD_KEYS:
                query.keyword = value
            elif key == "sort":
                query.sort = Sorting.from_str(value)
            elif key == "page":
                page = _parse_int(value)
                if page is not None:
                    query.page = page
            elif key in _PER_PAGE_KEYS:
                per_page = _parse_int(value)
                if per_page is not None:
                    query.per_page = per_page
        if words:
            query.string = " ".join(words)
        return query

    def to_params(self) -> dict[str, str]:
        """Return the query-string parameters understood by the crates endpoint."""
        params: dict[str, str] = {}
        if self.page is not None:
            params["page"] = str(self.page)
        if self.per_page is not None:
            params["per_page"] = str(self.per_page)
        if self.sort is not None:
            params["sort"] = self.sort.value
        if self.string:
            params["q"] = self.string
        if self.category is not None:
            params["category"] = self.category.value
        if self.keyword:
            params["keyword"] = self.keyword
        return params
