"""
Settings model — the user's devsetup configuration.

Loaded from config.yml. Every field has a default, so an empty or
missing file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ZshSettings(BaseModel):
    """Zsh shell preferences."""

    set_as_default: bool = True
    plugins: list[str] = Field(
        default_factory=lambda: ["git", "zsh-autosuggestions", "zsh-syntax-highlighting"]
    )


class AlacrittySettings(BaseModel):
    """Alacritty terminal preferences, rendered into alacritty.yml."""

    theme: str = "one_dark"
    font_family: str = "JetBrains Mono"
    font_size: float = Field(default=12.0, gt=0)
    opacity: float = Field(default=0.95, ge=0.0, le=1.0)


class TmuxSettings(BaseModel):
    """Tmux preferences."""

    use_custom_config: bool = True
    install_tpm: bool = True
    plugins: list[str] = Field(
        default_factory=lambda: [
            "tmux-plugins/tpm",
            "tmux-plugins/tmux-sensible",
            "tmux-plugins/tmux-resurrect",
            "tmux-plugins/tmux-continuum",
        ]
    )


class ZedSettings(BaseModel):
    """Zed editor preferences."""

    theme: str = "one_dark"
    extensions: list[str] = Field(
        default_factory=lambda: ["rust-analyzer", "prettier", "python-lsp"]
    )


class InstallerSettings(BaseModel):
    """Per-installer sections."""

    zsh: ZshSettings = Field(default_factory=ZshSettings)
    alacritty: AlacrittySettings = Field(default_factory=AlacrittySettings)
    tmux: TmuxSettings = Field(default_factory=TmuxSettings)
    zed: ZedSettings = Field(default_factory=ZedSettings)


class Settings(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    verbose: bool = False
    auto_yes: bool = False          # answer yes to every confirmation
    skip_installed: bool = False    # skip present components without offering a reinstall

    installers: InstallerSettings = Field(default_factory=InstallerSettings)
