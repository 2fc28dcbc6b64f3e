import math
from restaurant_grid.models.restaurant_model import GridCell

EARTH_RADIUS_M = 6371000.0
OVERLAP_FACTOR = 1.5  # cell spacing as a multiple of the cell radius
DISTANCE_TOLERANCE_M = 1e-6  # keeps lattice points lying exactly on the boundary

class GridTiler:
    """
    Covers a search disc with fixed-radius circular cells.
    Cell centers sit on a square lattice spaced at 1.5x the cell radius, so
    neighbouring cells overlap.
    """
    def __init__(self, base_radius: float = 1000.0, earth_radius: float = EARTH_RADIUS_M):
        self.base_radius = base_radius
        self.earth_radius = earth_radius

    def calculate_grid_points(self, center_lat: float, center_lng: float, radius: float) -> list[GridCell]:
        """Returns the cell centers within `radius` meters of the center, in row-major order."""
        lat_offset = math.degrees(self.base_radius / self.earth_radius)
        # Undefined at the poles
        lng_offset = math.degrees(self.base_radius / self.earth_radius / math.cos(math.radians(center_lat)))

        grid_count = math.ceil(radius / self.base_radius)

        cells = []
        for i in range(-grid_count, grid_count + 1):
            for j in range(-grid_count, grid_count + 1):
                lat = center_lat + i * lat_offset * OVERLAP_FACTOR
                lng = center_lng + j * lng_offset * OVERLAP_FACTOR

                if self.haversine_distance(center_lat, center_lng, lat, lng) <= radius + DISTANCE_TOLERANCE_M:
                    cells.append(GridCell(latitude=lat, longitude=lng))

        return cells

    def haversine_distance(self, lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Great-circle distance between two points, in meters."""
        lat1, lng1, lat2, lng2 = map(math.radians, (lat1, lng1, lat2, lng2))

        dlat = lat2 - lat1
        dlng = lng2 - lng1

        a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return self.earth_radius * c
