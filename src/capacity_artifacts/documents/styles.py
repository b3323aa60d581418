# src/capacity_artifacts/documents/styles.py
"""
Centralized styling for all capacity artifacts.

Inline CSS only: documents must render without fetching anything, so fonts
fall back to local faces.
"""

from capacity_artifacts.models.capacity import DensityMode
from capacity_artifacts.models.render_config import DEFAULT_CONFIG

INK = "#0f172a"         # headings
BODY = "#1e293b"        # body text
SLATE = "#334155"
MUTED = "#475569"
FAINT = "#64748b"
RULE = "#e2e8f0"
PANEL = "#f8fafc"
COHORT_ACCENT = "#9C27B0"

PAGE_WIDTH = 612
PAGE_HEIGHT = 792

SANS = "'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif"
MONO = "'JetBrains Mono', 'Consolas', monospace"

# Avatar diameter (px) per density
AVATAR_SIZE = {
    DensityMode.STANDARD: 18,
    DensityMode.COMPACT: 14,
}

_BASE = f"""
@page {{ size: {PAGE_WIDTH}px {PAGE_HEIGHT}px; margin: 0; }}
* {{ box-sizing: border-box; margin: 0; padding: 0; }}
html, body {{ width: {PAGE_WIDTH}px; min-height: {PAGE_HEIGHT}px; }}
body {{ font-family: {SANS}; font-size: 10px; line-height: 1.5; -webkit-font-smoothing: antialiased; }}
.page {{ width: {PAGE_WIDTH}px; min-height: {PAGE_HEIGHT}px; position: relative; }}
.page + .page {{ break-before: page; page-break-before: always; }}
.coc-grid {{ display: grid; grid-template-columns: 1fr 1fr; gap: 4px 20px; }}
.coc-wide {{ grid-column: span 2; }}
.coc-label {{ font-weight: 600; text-transform: uppercase; font-size: 7px; letter-spacing: 0.5px; }}
.coc-value-mono {{ font-family: {MONO}; font-size: 7.5px; letter-spacing: -0.2px; }}
.coc-status {{ font-weight: 700; letter-spacing: 0.5px; }}
.legal-title {{ font-size: 7px; font-weight: 700; margin-bottom: 3px; text-transform: uppercase; letter-spacing: 0.5px; }}
.legal-body {{ font-size: 6.5px; line-height: 1.55; }}
.legal-rights {{ font-size: 6.5px; font-weight: 700; margin-top: 4px; text-transform: uppercase; letter-spacing: 0.8px; }}
.render-latch {{ display: none; }}
@media print {{
  svg rect, svg circle, svg path, svg line {{ print-color-adjust: exact; -webkit-print-color-adjust: exact; }}
}}
"""

_LIGHT = f"""
body {{ color: {BODY}; background: #fff; }}
.page {{ padding: 36px 42px 32px 42px; background: #fff; }}
.artifact-title {{ font-size: 16px; font-weight: 700; color: {INK}; text-align: center; margin-bottom: 6px; padding-bottom: 8px; border-bottom: 2px solid {INK}; letter-spacing: 0.8px; text-transform: uppercase; }}
.chain-of-custody {{ padding: 12px 0 14px 0; border-bottom: 1px solid {RULE}; margin-bottom: 14px; }}
.coc-line {{ font-size: 9px; line-height: 1.6; }}
.coc-label, .coc-status {{ color: {INK}; }}
.coc-value, .coc-value-mono {{ color: {SLATE}; }}
.coc-value em {{ font-style: italic; color: {MUTED}; }}
.section-title {{ font-size: 12px; font-weight: 700; color: {INK}; margin-bottom: 10px; letter-spacing: 0.5px; text-transform: uppercase; }}
.section-subtitle {{ font-size: 7px; color: {FAINT}; margin-bottom: 8px; }}
.info-grid {{ display: grid; grid-template-columns: auto 1fr auto 1fr; gap: 4px 12px; font-size: 9px; margin-bottom: 14px; }}
.info-label {{ font-weight: 600; color: {INK}; }}
.info-value {{ color: {SLATE}; }}
.info-value-mono {{ font-family: {MONO}; color: {SLATE}; }}
.footer-section {{ border-top: 1px solid #cbd5e1; padding-top: 10px; }}
.legal-block {{ background: {PANEL}; border: 1px solid {RULE}; padding: 8px 10px; margin-top: 6px; }}
.legal-title, .legal-rights {{ color: {INK}; }}
.legal-body {{ color: {MUTED}; }}
"""

_SINGLE = f"""
.capacity-definition {{ background: {PANEL}; border: 1px solid {RULE}; border-left: 3px solid {INK}; padding: 12px 14px; margin-bottom: 14px; }}
.capacity-definition-title {{ font-size: 10px; font-weight: 700; color: {INK}; margin-bottom: 8px; letter-spacing: 0.3px; }}
.capacity-definition-body {{ font-size: 8px; line-height: 1.6; color: {SLATE}; }}
.capacity-definition-body p {{ margin-bottom: 6px; }}
.capacity-definition-emphasis {{ font-weight: 600; color: {INK}; font-style: italic; }}
.capacity-definition-list {{ margin: 4px 0 6px 16px; }}
.capacity-definition-list li {{ margin-bottom: 2px; color: {MUTED}; }}
.capacity-definition-footer {{ font-style: italic; color: {FAINT}; margin-bottom: 0; }}
.main-content {{ display: flex; gap: 20px; margin-bottom: 16px; }}
.audit-panel {{ width: 180px; flex-shrink: 0; border-left: 3px solid {INK}; padding-left: 12px; padding-top: 4px; }}
.audit-title {{ font-size: 9px; font-weight: 700; color: {INK}; margin-bottom: 10px; letter-spacing: 0.5px; text-transform: uppercase; }}
.audit-row {{ margin-bottom: 8px; }}
.audit-label {{ font-weight: 600; color: {INK}; font-size: 8px; text-transform: uppercase; letter-spacing: 0.3px; }}
.audit-value {{ color: {SLATE}; font-size: 9px; font-weight: 500; }}
.audit-note {{ display: block; font-size: 7.5px; font-style: italic; color: {FAINT}; margin-top: 1px; }}
.verdict-row {{ margin-top: 12px; padding-top: 8px; border-top: 1px solid {RULE}; }}
.audit-verdict {{ font-weight: 700; color: {INK}; font-size: 8px; letter-spacing: 0.3px; }}
.charts-panel {{ flex: 1; }}
.chart-card {{ background: {DEFAULT_CONFIG.palette.background}; border-radius: 4px; padding: 12px 14px 10px 14px; margin-bottom: 12px; }}
.chart-header {{ font-size: 8px; font-weight: 600; color: rgba(255,255,255,0.7); text-align: center; margin-bottom: 8px; letter-spacing: 0.8px; text-transform: uppercase; }}
.chart-header-sub {{ font-weight: 400; color: rgba(255,255,255,0.4); font-size: 7px; margin-left: 6px; }}
.provider-title {{ font-size: 8px; font-weight: 700; color: {INK}; margin-bottom: 4px; text-transform: uppercase; letter-spacing: 0.5px; }}
.provider-body {{ font-size: 7.5px; line-height: 1.5; color: {SLATE}; margin-bottom: 8px; }}
.how-to-use {{ margin-top: 10px; margin-bottom: 10px; }}
"""

_GROUP = f"""
.group-badge {{ display: inline-block; background: rgba(0,229,255,0.15); color: #00E5FF; padding: 2px 6px; border-radius: 4px; font-size: 8px; font-weight: 600; letter-spacing: 0.5px; margin-left: 6px; }}
.members-grid {{ display: flex; flex-direction: column; gap: 6px; }}
.member-card {{ display: flex; background: {PANEL}; border: 1px solid {RULE}; border-radius: 4px; padding: 6px 8px; }}
.member-info {{ width: 120px; flex-shrink: 0; padding-right: 8px; border-right: 1px solid {RULE}; }}
.member-name {{ font-size: 9px; font-weight: 600; color: {INK}; margin-bottom: 2px; }}
.member-handle {{ font-size: 7px; color: {FAINT}; margin-bottom: 4px; }}
.member-detail {{ font-size: 7px; color: {MUTED}; margin-bottom: 1px; }}
.member-detail-label {{ font-weight: 600; color: {SLATE}; }}
.status-badge {{ display: inline-block; padding: 1px 5px; border-radius: 3px; font-size: 6.5px; font-weight: 600; text-transform: uppercase; letter-spacing: 0.3px; }}
.status-resourced {{ background: rgba(0,229,255,0.15); color: #00b8d9; }}
.status-stretched {{ background: rgba(232,168,48,0.15); color: #b8860b; }}
.status-depleted {{ background: rgba(244,67,54,0.15); color: #d32f2f; }}
.member-chart {{ flex: 1; padding-left: 8px; }}
.chart-wrapper {{ width: 100%; height: 80px; border-radius: 3px; overflow: hidden; background: {DEFAULT_CONFIG.palette.background}; }}
.chart-wrapper svg {{ width: 100%; height: 100%; }}
"""


def _cohort(density: DensityMode) -> str:
    compact = density is DensityMode.COMPACT
    background = DEFAULT_CONFIG.palette.background
    title_size = "11px" if compact else "12px"
    subtitle_size = "9px" if compact else "10px"
    gap = "4px" if compact else "6px"

    return f"""
body {{ color: #fff; background: {background}; }}
.page {{ padding: 20px 24px; background: {background}; }}
.artifact-title {{ font-size: 16px; font-weight: 700; color: rgba(255,255,255,0.95); margin-bottom: 4px; letter-spacing: 0.5px; }}
.artifact-subtitle {{ font-size: 11px; color: rgba(255,255,255,0.5); margin-bottom: 12px; }}
.cohort-badge {{ display: inline-block; background: rgba(156,39,176,0.15); color: {COHORT_ACCENT}; padding: 3px 8px; border-radius: 4px; font-size: 10px; font-weight: 600; letter-spacing: 0.5px; margin-left: 8px; border: 1px solid rgba(156,39,176,0.3); }}
.chain-of-custody {{ background: rgba(255,255,255,0.03); border: 1px solid rgba(255,255,255,0.08); border-radius: 6px; padding: 8px 10px; margin-bottom: 10px; }}
.coc-line {{ font-size: 8px; line-height: 1.4; }}
.coc-label {{ color: rgba(255,255,255,0.5); }}
.coc-value {{ color: rgba(255,255,255,0.8); }}
.coc-value-mono {{ color: rgba(255,255,255,0.7); }}
.coc-status {{ color: {COHORT_ACCENT}; }}
.privacy-notice {{ font-size: 9px; color: {COHORT_ACCENT}; font-weight: 600; background: rgba(156,39,176,0.1); border: 1px solid rgba(156,39,176,0.2); border-radius: 4px; padding: 6px 8px; margin-bottom: 10px; }}
.stats-row {{ display: flex; justify-content: space-around; gap: 8px; background: rgba(255,255,255,0.02); border: 1px solid rgba(255,255,255,0.08); border-radius: 6px; padding: 10px 12px; margin-bottom: 12px; }}
.stat-item {{ text-align: center; }}
.stat-dot {{ width: 10px; height: 10px; border-radius: 50%; margin: 0 auto 4px auto; }}
.stat-dot-resourced {{ background: {DEFAULT_CONFIG.palette.resourced}; }}
.stat-dot-stretched {{ background: {DEFAULT_CONFIG.palette.stretched}; }}
.stat-dot-depleted {{ background: {DEFAULT_CONFIG.palette.depleted}; }}
.stat-value {{ font-size: 18px; font-weight: 700; color: rgba(255,255,255,0.9); }}
.stat-value-avg {{ color: {COHORT_ACCENT}; }}
.stat-label {{ font-size: 9px; color: rgba(255,255,255,0.5); text-transform: uppercase; letter-spacing: 0.5px; }}
.section-header {{ margin-bottom: 8px; }}
.section-title {{ font-size: {title_size}; font-weight: 700; color: rgba(255,255,255,0.9); letter-spacing: 0.3px; }}
.section-subtitle {{ font-size: {subtitle_size}; color: rgba(255,255,255,0.5); margin-top: 2px; }}
.grid-container {{ margin-bottom: 10px; }}
.grid-row {{ display: flex; gap: {gap}; margin-bottom: {gap}; }}
.mini-chart-card {{ flex: 1; background: rgba(255,255,255,0.03); border: 1px solid rgba(255,255,255,0.08); border-radius: 6px; padding: {gap}; }}
.mini-chart-header {{ display: flex; align-items: center; justify-content: space-between; margin-bottom: 4px; }}
.avatar-wrap svg {{ display: block; }}
.seat-index {{ font-size: 7px; color: rgba(255,255,255,0.5); }}
.state-indicator {{ width: 6px; height: 6px; border-radius: 3px; }}
.mini-chart-container {{ background: {background}; border-radius: 3px; overflow: hidden; }}
.mini-chart-container svg {{ width: 100%; height: auto; display: block; }}
.continuation-header {{ font-size: 11px; font-weight: 600; color: rgba(255,255,255,0.6); margin-bottom: 12px; border-bottom: 1px solid rgba(255,255,255,0.08); padding-bottom: 8px; }}
.aggregate-section {{ margin-top: 10px; padding-top: 10px; border-top: 1px solid rgba(255,255,255,0.08); }}
.aggregate-chart-container {{ text-align: center; margin-bottom: 10px; }}
.aggregate-chart-container svg {{ width: 100%; max-width: 320px; height: auto; }}
.footer-section {{ padding-top: 8px; }}
.legal-block {{ background: rgba(255,255,255,0.02); border: 1px solid rgba(255,255,255,0.08); border-radius: 6px; padding: 8px 10px; }}
.legal-title, .legal-rights {{ color: rgba(255,255,255,0.5); }}
.legal-body {{ color: rgba(255,255,255,0.4); }}
"""


def stylesheet(kind: str, density: DensityMode = DensityMode.STANDARD) -> str:
    """
    Complete inline stylesheet for one document.
    - single / group -> light print layout
    - cohort         -> dark layout, spacing set by density
    """
    if kind == "single":
        body = _LIGHT + _SINGLE
    elif kind == "group":
        body = _LIGHT + _GROUP
    elif kind == "cohort":
        body = _cohort(density)
    else:
        raise ValueError(f"Unknown document kind: {kind!r}")

    return _BASE + body
