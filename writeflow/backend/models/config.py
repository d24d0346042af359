"""Application configuration document.

A single ``AppConfig`` holds every user preference.  It is persisted as one
JSON blob in the ``config`` table and exchanged with the UI and with
import/export files in the same JSON shape.

No field has a model-level default: a stored or imported document missing a
section is malformed and is rejected.  ``AppConfig.default()`` builds the
factory settings explicitly.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel

from writeflow.backend.models.enums import ColorScheme

# -- Sections ----------------------------------------------------------------


class GeneralConfig(BaseModel):
    language: str
    auto_save: bool
    auto_save_interval: int
    """Seconds."""
    backup_enabled: bool
    backup_interval: int
    """Minutes."""
    default_workspace: str | None
    recent_files_limit: int


class EditorConfig(BaseModel):
    theme: str
    font_family: str
    font_size: int
    line_height: float
    word_wrap: bool
    show_line_numbers: bool
    show_minimap: bool
    tab_size: int
    vim_mode: bool
    spell_check: bool
    grammar_check: bool
    live_preview: bool


class UIConfig(BaseModel):
    sidebar_width: int
    preview_width: int
    show_sidebar: bool
    show_preview: bool
    show_toolbar: bool
    show_status_bar: bool
    compact_mode: bool
    color_scheme: ColorScheme


class PdfExportOptions(BaseModel):
    page_size: str
    margins: str
    include_toc: bool
    include_page_numbers: bool
    custom_css: str | None


class HtmlExportOptions(BaseModel):
    include_css: bool
    standalone: bool
    custom_template: str | None


class MarkdownExportOptions(BaseModel):
    format: str
    include_metadata: bool
    line_ending: str


class ExportConfig(BaseModel):
    default_format: str
    pdf_options: PdfExportOptions
    html_options: HtmlExportOptions
    markdown_options: MarkdownExportOptions


class WriteFlowConfig(BaseModel):
    """Integration with the WriteFlow command-line tool."""

    cli_path: str | None
    auto_sync: bool
    sync_interval: int
    """Minutes."""
    default_template: str | None
    custom_commands: dict[str, str]


class PluginConfig(BaseModel):
    enabled_plugins: list[str]
    plugin_settings: dict[str, Any]


# -- Top-level document ------------------------------------------------------


class AppConfig(BaseModel):
    general: GeneralConfig
    editor: EditorConfig
    ui: UIConfig
    export: ExportConfig
    writeflow: WriteFlowConfig
    plugins: PluginConfig
    updated_at: datetime

    @classmethod
    def default(cls) -> AppConfig:
        """Factory settings, stamped with the current time."""
        return cls(
            general=GeneralConfig(
                language="zh-CN",
                auto_save=True,
                auto_save_interval=30,
                backup_enabled=True,
                backup_interval=10,
                default_workspace=None,
                recent_files_limit=10,
            ),
            editor=EditorConfig(
                theme="default",
                font_family="Monaco",
                font_size=14,
                line_height=1.5,
                word_wrap=True,
                show_line_numbers=True,
                show_minimap=False,
                tab_size=2,
                vim_mode=False,
                spell_check=True,
                grammar_check=False,
                live_preview=True,
            ),
            ui=UIConfig(
                sidebar_width=280,
                preview_width=400,
                show_sidebar=True,
                show_preview=True,
                show_toolbar=True,
                show_status_bar=True,
                compact_mode=False,
                color_scheme=ColorScheme.AUTO,
            ),
            export=ExportConfig(
                default_format="pdf",
                pdf_options=PdfExportOptions(
                    page_size="A4",
                    margins="2cm",
                    include_toc=True,
                    include_page_numbers=True,
                    custom_css=None,
                ),
                html_options=HtmlExportOptions(include_css=True, standalone=True, custom_template=None),
                markdown_options=MarkdownExportOptions(format="CommonMark", include_metadata=True, line_ending="LF"),
            ),
            writeflow=WriteFlowConfig(
                cli_path=None,
                auto_sync=False,
                sync_interval=5,
                default_template=None,
                custom_commands={},
            ),
            plugins=PluginConfig(enabled_plugins=[], plugin_settings={}),
            updated_at=datetime.now(UTC),
        )
