"""Option groups that serialise into ``wkhtmltopdf`` command line fragments.

Each group is a dataclass whose fields describe one command line option
through field metadata. Rendering walks the fields in declaration order and
skips everything still at its default, so ``args()`` of a freshly created
group is always empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Mapping, TypeVar

from .exceptions import ConfigurationError

__all__ = [
    "OptionKind",
    "GlobalOptions",
    "OutlineOptions",
    "PageOptions",
    "HeaderFooterOptions",
    "TocOptions",
    "InputPageOptions",
    "new_page_options",
]

GroupT = TypeVar("GroupT", bound="_OptionGroup")


class OptionKind(str, Enum):
    """How an option value is projected onto the command line."""

    STRING = "string"
    FLAG = "flag"
    INT = "int"
    FLOAT = "float"
    REPEATED = "repeated"
    MAPPING = "mapping"


def _string(flag: str) -> Any:
    return field(default="", metadata={"flag": flag, "kind": OptionKind.STRING})


def _flag(flag: str) -> Any:
    return field(default=False, metadata={"flag": flag, "kind": OptionKind.FLAG})


def _int(flag: str) -> Any:
    return field(default=None, metadata={"flag": flag, "kind": OptionKind.INT})


def _float(flag: str) -> Any:
    return field(default=None, metadata={"flag": flag, "kind": OptionKind.FLOAT})


def _repeated(flag: str) -> Any:
    return field(default_factory=list, metadata={"flag": flag, "kind": OptionKind.REPEATED})


def _mapping(flag: str) -> Any:
    return field(default_factory=dict, metadata={"flag": flag, "kind": OptionKind.MAPPING})


def _render(flag: str, kind: OptionKind, value: Any) -> list[str]:
    option = f"--{flag}"
    if kind is OptionKind.STRING:
        return [option, str(value)] if value else []
    if kind is OptionKind.FLAG:
        return [option] if value else []
    if kind is OptionKind.INT:
        return [option, str(value)] if value is not None else []
    if kind is OptionKind.FLOAT:
        return [option, f"{float(value):.3f}"] if value is not None else []
    if kind is OptionKind.REPEATED:
        rendered: list[str] = []
        for item in value:
            rendered.extend([option, str(item)])
        return rendered
    if kind is OptionKind.MAPPING:
        rendered = []
        for key, item in value.items():
            rendered.extend([option, str(key), str(item)])
        return rendered
    raise ValueError(f"Unsupported option kind: {kind}")


def _is_default(kind: OptionKind, value: Any) -> bool:
    if kind is OptionKind.STRING:
        return value == ""
    if kind is OptionKind.FLAG:
        return not value
    if kind in (OptionKind.INT, OptionKind.FLOAT):
        return value is None
    return not value


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    """Return *data* as a dict, treating ``None`` as empty."""

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Expected an object for {what}, got {type(data).__name__}")
    return dict(data)


class _OptionGroup:
    """Rendering and (de)serialisation shared by every option dataclass."""

    group_name: ClassVar[str] = "options"

    def args(self) -> list[str]:
        """Return the command line fragment for all non-default options."""

        rendered: list[str] = []
        for option in fields(self):  # type: ignore[arg-type]
            rendered.extend(_render(option.metadata["flag"], option.metadata["kind"], getattr(self, option.name)))
        return rendered

    def to_dict(self) -> dict[str, Any]:
        """Return non-default values keyed by field name."""

        data: dict[str, Any] = {}
        for option in fields(self):  # type: ignore[arg-type]
            value = getattr(self, option.name)
            if _is_default(option.metadata["kind"], value):
                continue
            if isinstance(value, list):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)
            data[option.name] = value
        return data

    @classmethod
    def from_dict(cls: type[GroupT], data: Mapping[str, Any] | None) -> GroupT:
        data = _require_mapping(data, f"{cls.group_name} options")
        known = {option.name for option in fields(cls)}  # type: ignore[arg-type]
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown {cls.group_name} option(s): {', '.join(unknown)}"
            )
        return cls(**data)


@dataclass
class GlobalOptions(_OptionGroup):
    """Options that apply to the whole document."""

    group_name: ClassVar[str] = "global"

    cookie_jar: str = _string("cookie-jar")
    copies: int | None = _int("copies")
    dpi: int | None = _int("dpi")
    extended_help: bool = _flag("extended-help")
    grayscale: bool = _flag("grayscale")
    help: bool = _flag("help")
    htmldoc: bool = _flag("htmldoc")
    image_dpi: int | None = _int("image-dpi")
    image_quality: int | None = _int("image-quality")
    license: bool = _flag("license")
    low_quality: bool = _flag("lowquality")
    man_page: bool = _flag("manpage")
    margin_bottom: int | float | str | None = _int("margin-bottom")
    margin_left: int | float | str | None = _int("margin-left")
    margin_right: int | float | str | None = _int("margin-right")
    margin_top: int | float | str | None = _int("margin-top")
    no_collate: bool = _flag("nocollate")
    no_pdf_compression: bool = _flag("no-pdf-compression")
    orientation: str = _string("orientation")
    page_height: int | float | str | None = _int("page-height")
    page_size: str = _string("page-size")
    page_width: int | float | str | None = _int("page-width")
    quiet: bool = _flag("quiet")
    read_args_from_stdin: bool = _flag("read-args-from-stdin")
    readme: bool = _flag("readme")
    title: str = _string("title")
    version: bool = _flag("version")


@dataclass
class OutlineOptions(_OptionGroup):
    """Options controlling the PDF outline (bookmarks)."""

    group_name: ClassVar[str] = "outline"

    dump_default_toc_xsl: bool = _flag("dump-default-toc-xsl")
    dump_outline: str = _string("dump-outline")
    no_outline: bool = _flag("no-outline")
    outline_depth: int | None = _int("outline-depth")


@dataclass
class PageOptions(_OptionGroup):
    """Options for a single input page, also used by the cover and TOC."""

    group_name: ClassVar[str] = "page"

    allow: list[str] = _repeated("allow")
    no_background: bool = _flag("no-background")
    bypass_proxy_for: list[str] = _repeated("bypass-proxy-for")
    cache_dir: str = _string("cache-dir")
    checkbox_checked_svg: str = _string("checkbox-checked-svg")
    checkbox_svg: str = _string("checkbox-svg")
    cookie: dict[str, str] = _mapping("cookie")
    custom_header: dict[str, str] = _mapping("custom-header")
    custom_header_propagation: bool = _flag("custom-header-propagation")
    debug_javascript: bool = _flag("debug-javascript")
    default_header: bool = _flag("default-header")
    encoding: str = _string("encoding")
    disable_external_links: bool = _flag("disable-external-links")
    enable_forms: bool = _flag("enable-forms")
    no_images: bool = _flag("no-images")
    disable_internal_links: bool = _flag("disable-internal-links")
    disable_javascript: bool = _flag("disable-javascript")
    javascript_delay: int | None = _int("javascript-delay")
    load_error_handling: str = _string("load-error-handling")
    load_media_error_handling: str = _string("load-media-error-handling")
    disable_local_file_access: bool = _flag("disable-local-file-access")
    minimum_font_size: int | None = _int("minimum-font-size")
    exclude_from_outline: bool = _flag("exclude-from-outline")
    page_offset: int | None = _int("page-offset")
    password: str = _string("password")
    enable_plugins: bool = _flag("enable-plugins")
    post: dict[str, str] = _mapping("post")
    post_file: dict[str, str] = _mapping("post-file")
    print_media_type: bool = _flag("print-media-type")
    proxy: str = _string("proxy")
    radiobutton_checked_svg: str = _string("radiobutton-checked-svg")
    radiobutton_svg: str = _string("radiobutton-svg")
    run_script: list[str] = _repeated("run-script")
    disable_smart_shrinking: bool = _flag("disable-smart-shrinking")
    no_stop_slow_scripts: bool = _flag("no-stop-slow-scripts")
    enable_toc_back_links: bool = _flag("enable-toc-back-links")
    user_style_sheet: str = _string("user-style-sheet")
    username: str = _string("username")
    viewport_size: str = _string("viewport-size")
    window_status: str = _string("window-status")
    zoom: float | None = _float("zoom")


@dataclass
class HeaderFooterOptions(_OptionGroup):
    """Header and footer options of an input page."""

    group_name: ClassVar[str] = "header/footer"

    footer_center: str = _string("footer-center")
    footer_font_name: str = _string("footer-font-name")
    footer_font_size: int | None = _int("footer-font-size")
    footer_html: str = _string("footer-html")
    footer_left: str = _string("footer-left")
    footer_line: bool = _flag("footer-line")
    footer_right: str = _string("footer-right")
    footer_spacing: float | None = _float("footer-spacing")
    header_center: str = _string("header-center")
    header_font_name: str = _string("header-font-name")
    header_font_size: int | None = _int("header-font-size")
    header_html: str = _string("header-html")
    header_left: str = _string("header-left")
    header_line: bool = _flag("header-line")
    header_right: str = _string("header-right")
    header_spacing: float | None = _float("header-spacing")
    replace: dict[str, str] = _mapping("replace")


@dataclass
class TocOptions(_OptionGroup):
    """Options specific to the generated table of contents."""

    group_name: ClassVar[str] = "toc"

    disable_dotted_lines: bool = _flag("disable-dotted-lines")
    toc_header_text: str = _string("toc-header-text")
    toc_level_indentation: int | None = _int("toc-level-indentation")
    disable_toc_links: bool = _flag("disable-toc-links")
    toc_text_size_shrink: float | None = _float("toc-text-size-shrink")
    xsl_style_sheet: str = _string("xsl-style-sheet")


@dataclass
class InputPageOptions:
    """Page options followed by header/footer options for one input page."""

    page: PageOptions = field(default_factory=PageOptions)
    header_footer: HeaderFooterOptions = field(default_factory=HeaderFooterOptions)

    def args(self) -> list[str]:
        return [*self.page.args(), *self.header_footer.args()]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        page = self.page.to_dict()
        header_footer = self.header_footer.to_dict()
        if page:
            data["page"] = page
        if header_footer:
            data["header_footer"] = header_footer
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "InputPageOptions":
        data = _require_mapping(data, "input page options")
        return cls(
            page=PageOptions.from_dict(data.get("page")),
            header_footer=HeaderFooterOptions.from_dict(data.get("header_footer")),
        )


def new_page_options() -> InputPageOptions:
    """Return a fresh :class:`InputPageOptions` with every option at its default."""

    return InputPageOptions()
