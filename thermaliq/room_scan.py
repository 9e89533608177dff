"""Turns raw AR room-scan payloads into geometry overrides."""
import logging

from .inputs import ScanOverrides

_LOGGER = logging.getLogger(__name__)


def _surface_kind(item):
    return str(item.get('type') or item.get('category') or '').lower()


def determine_data_quality(dimensions, surfaces, openings):
    has_dimensions = bool(dimensions.get('width') and dimensions.get('height') and dimensions.get('depth'))
    has_surfaces = bool(surfaces)
    has_openings = bool(openings)

    if has_dimensions and has_surfaces and has_openings:
        return 'excellent'
    if has_dimensions and (has_surfaces or has_openings):
        return 'good'
    if has_dimensions or has_surfaces:
        return 'fair'
    return 'poor'


def process_room_scan(room_data):
    """
    Extracts floor area, ceiling height, window percentage and door count
    from a scan payload of the form
    {'dimensions': {width, height, depth}, 'surfaces': [...], 'openings': [...]}.
    Dimensions are in feet, areas in square feet.

    Returns (ScanOverrides, data_quality).
    """
    dimensions = room_data.get('dimensions') or {}
    surfaces = room_data.get('surfaces') or []
    openings = room_data.get('openings') or []

    width = dimensions.get('width')
    height = dimensions.get('height')
    depth = dimensions.get('depth')

    wall_area = sum(s.get('area', 0) or 0 for s in surfaces if 'wall' in _surface_kind(s))
    floor_surface_area = sum(s.get('area', 0) or 0 for s in surfaces if 'floor' in _surface_kind(s))

    if width and depth:
        floor_area = width * depth
    elif floor_surface_area > 0:
        floor_area = floor_surface_area
    else:
        floor_area = None

    ceiling_height = height or None
    if ceiling_height is None and wall_area > 0 and width and depth:
        ceiling_height = wall_area / (2 * (width + depth))

    window_area = sum(o.get('area', 0) or 0 for o in openings if 'window' in _surface_kind(o))
    window_area_percent = None
    if wall_area > 0 and window_area > 0:
        window_area_percent = window_area / wall_area * 100

    # A scan with no openings at all says nothing about doors
    num_doors = None
    if openings:
        num_doors = sum(1 for o in openings if 'door' in _surface_kind(o))

    quality = determine_data_quality(dimensions, surfaces, openings)
    _LOGGER.debug("Room scan: floor=%s ft2, height=%s ft, windows=%s%%, doors=%s, quality=%s",
                  floor_area, ceiling_height, window_area_percent, num_doors, quality)

    overrides = ScanOverrides(
        floor_area=floor_area,
        ceiling_height=ceiling_height,
        window_area_percent=window_area_percent,
        num_exterior_doors=num_doors,
    )
    return overrides, quality
