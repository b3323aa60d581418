from dataclasses import dataclass

from capacity_artifacts.models.capacity import ZoneBand


@dataclass(frozen=True)
class ZoneStyle:
    band: ZoneBand
    label: str
    letter: str             # one-letter chart legend
    band_opacity: str       # zone background fill-opacity
    badge_class: str        # CSS class for status badges


ZONE_THEME = {
    ZoneBand.RESOURCED: ZoneStyle(
        band=ZoneBand.RESOURCED,
        label="Resourced",
        letter="H",
        band_opacity="0.06",
        badge_class="status-resourced",
    ),
    ZoneBand.STRETCHED: ZoneStyle(
        band=ZoneBand.STRETCHED,
        label="Stretched",
        letter="M",
        band_opacity="0.04",
        badge_class="status-stretched",
    ),
    ZoneBand.DEPLETED: ZoneStyle(
        band=ZoneBand.DEPLETED,
        label="Depleted",
        letter="L",
        band_opacity="0.06",
        badge_class="status-depleted",
    ),
}

# Top of the chart to bottom
BANDS_TOP_DOWN = (ZoneBand.RESOURCED, ZoneBand.STRETCHED, ZoneBand.DEPLETED)
