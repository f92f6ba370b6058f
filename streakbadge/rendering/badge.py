"""Badge rendering - SVG generation for streak metrics.

The badge is a fixed 560x240 document. Colours come from CSS custom
properties with a `prefers-color-scheme: dark` override, fonts are named but
never fetched, so the SVG renders the same wherever it is embedded.
"""

from streakbadge.models import Metrics
from streakbadge.models import ProfileSummary

BADGE_WIDTH = 560
BADGE_HEIGHT = 240
BADGE_TITLE = "GitHub Activity 🥷"

BAR_SPACING = 6
BAR_OFFSET = 24
BAR_WIDTH = 4
# Bars are drawn inside the chart group (translated to 32,128); y=60 there is
# the chart rule at y=188.
BAR_BASELINE = 60

_STYLE = """<style>
:root {
  --bg-start: #f7f4ef;
  --bg-end: #e0f2fe;
  --card: rgba(255,255,255,0.92);
  --text: #0f172a;
  --muted: #64748b;
  --border: rgba(15,23,42,0.08);
  --accent-1: #0ea5e9;
  --accent-2: #22c55e;
  --accent-3: #f59e0b;
}
@media (prefers-color-scheme: dark) {
  :root {
    --bg-start: #0b1220;
    --bg-end: #0f172a;
    --card: rgba(15,23,42,0.88);
    --text: #e2e8f0;
    --muted: #94a3b8;
    --border: rgba(148,163,184,0.18);
    --accent-1: #38bdf8;
    --accent-2: #4ade80;
    --accent-3: #fbbf24;
  }
}

text {
  font-family: "Space Grotesk", "Manrope", "Segoe UI", sans-serif;
  fill: var(--text);
}
.small { fill: var(--muted); font-size: 11px; letter-spacing: 0.02em; }
.label { fill: var(--muted); font-size: 10px; letter-spacing: 0.18em; }
.value { font-size: 24px; font-weight: 600; }
.title { font-size: 16px; font-weight: 600; letter-spacing: 0.06em; text-transform: uppercase; }
.chip { fill: var(--text); font-size: 10px; letter-spacing: 0.14em; }
.bar { fill: url(#barGrad); }
</style>"""

_DEFS = """<defs>
  <linearGradient id="bg" x1="0" y1="0" x2="1" y2="1">
    <stop offset="0%" stop-color="var(--bg-start)"/>
    <stop offset="100%" stop-color="var(--bg-end)"/>
  </linearGradient>
  <linearGradient id="barGrad" x1="0" y1="0" x2="0" y2="1">
    <stop offset="0%" stop-color="var(--accent-1)"/>
    <stop offset="100%" stop-color="var(--accent-2)"/>
  </linearGradient>
  <linearGradient id="spark" x1="0" y1="0" x2="1" y2="1">
    <stop offset="0%" stop-color="var(--accent-1)" stop-opacity="0.9"/>
    <stop offset="100%" stop-color="var(--accent-3)" stop-opacity="0.9"/>
  </linearGradient>
  <pattern id="grid" width="22" height="22" patternUnits="userSpaceOnUse">
    <path d="M22 0H0V22" fill="none" stroke="rgba(15,23,42,0.06)" stroke-width="1"/>
  </pattern>
  <filter id="blur" x="-20%" y="-20%" width="140%" height="140%">
    <feGaussianBlur stdDeviation="18"/>
  </filter>
</defs>"""


def bar_position(index: int, height: int) -> tuple[int, int]:
    """Return the (x, y) of a bar so that it grows upward from the baseline."""

    return index * BAR_SPACING + BAR_OFFSET, BAR_BASELINE - height


def render_bars(bar_heights: tuple[int, ...]) -> str:
    bars: list[str] = []
    for index, height in enumerate(bar_heights):
        x, y = bar_position(index, height)
        bars.append(
            f'<rect class="bar" x="{x}" y="{y}" width="{BAR_WIDTH}" '
            f'height="{height}" rx="1"/>'
        )
    return "".join(bars)


def render_footer(metrics: Metrics, profile: ProfileSummary) -> str:
    return (
        f"Repos {profile.repo_count} · Stars {profile.star_count} · "
        f"Followers {profile.follower_count} · "
        f"Following {profile.following_count} · "
        f"Commits(30d) {metrics.window_total} · "
        f"Total {profile.total_contributions}"
    )


def render_badge(metrics: Metrics, profile: ProfileSummary) -> str:
    """Render computed metrics and profile numbers into a standalone SVG.

    Args:
        metrics: Streak and 30-day window metrics.
        profile: Repository, star, follower and contribution totals.

    Returns:
        Complete SVG document as a string.
    """

    window_size = len(metrics.bar_heights)
    bars = render_bars(metrics.bar_heights)
    footer = render_footer(metrics, profile)

    return f"""<svg width="{BADGE_WIDTH}" height="{BADGE_HEIGHT}" viewBox="0 0 {BADGE_WIDTH} {BADGE_HEIGHT}" xmlns="http://www.w3.org/2000/svg">
{_STYLE}

{_DEFS}

<rect width="{BADGE_WIDTH}" height="{BADGE_HEIGHT}" rx="28" fill="url(#bg)"/>
<circle cx="72" cy="40" r="54" fill="url(#spark)" opacity="0.5" filter="url(#blur)"/>
<circle cx="498" cy="196" r="64" fill="url(#spark)" opacity="0.35" filter="url(#blur)"/>

<rect x="12" y="12" width="536" height="216" rx="22" fill="var(--card)" stroke="var(--border)"/>
<rect x="12" y="12" width="536" height="216" rx="22" fill="url(#grid)" opacity="0.55"/>

<text x="32" y="38" class="title">{BADGE_TITLE}</text>
<rect x="426" y="22" width="106" height="20" rx="10" fill="url(#spark)" opacity="0.12"/>
<text x="440" y="36" class="chip">LAST {window_size}D</text>

<text x="32" y="84" class="value">🔥 {metrics.current_streak}</text>
<text x="32" y="102" class="label">CURRENT STREAK</text>

<text x="176" y="84" class="value">🏆 {metrics.longest_streak}</text>
<text x="176" y="102" class="label">LONGEST</text>

<text x="304" y="84" class="value">📈 {metrics.window_active_days}/{window_size}</text>
<text x="304" y="102" class="label">ACTIVE DAYS</text>

<rect x="32" y="126" width="496" height="62" rx="14" fill="rgba(15,23,42,0.04)"/>
<line x1="32" y1="188" x2="528" y2="188" stroke="rgba(15,23,42,0.08)" stroke-width="1"/>
<g transform="translate(32,128)">{bars}</g>

<text x="32" y="210" class="small">{footer}</text>
</svg>
"""
