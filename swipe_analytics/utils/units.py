"""
Conversion of pixel measurements to physical units.
"""

MM_PER_INCH = 25.4


class PhysicalUnitsConverter:
    """Converts pixel distances, velocities and accelerations to mm and m."""
    
    def __init__(self, xdpi: float, ydpi: float):
        if xdpi <= 0 or ydpi <= 0:
            raise ValueError("Display density must be positive")
        self.xdpi = xdpi
        self.ydpi = ydpi
        self.pixels_per_mm_x = xdpi / MM_PER_INCH
        self.pixels_per_mm_y = ydpi / MM_PER_INCH
    
    def pixels_to_mm_x(self, pixels: float) -> float:
        return pixels / self.pixels_per_mm_x
    
    def pixels_to_mm_y(self, pixels: float) -> float:
        return pixels / self.pixels_per_mm_y
    
    def pixels_to_mm(self, pixels: float) -> float:
        """Convert a pixel distance using the average density."""
        avg_pixels_per_mm = (self.pixels_per_mm_x + self.pixels_per_mm_y) / 2
        return pixels / avg_pixels_per_mm
    
    def pixels_to_meters(self, pixels: float) -> float:
        return self.pixels_to_mm(pixels) / 1000
    
    # Time units are unchanged, so rates convert like distances
    def velocity_to_mm_per_second(self, velocity_px: float) -> float:
        return self.pixels_to_mm(velocity_px)
    
    def velocity_to_meters_per_second(self, velocity_px: float) -> float:
        return self.pixels_to_meters(velocity_px)
    
    def acceleration_to_mm_per_second_squared(self, acceleration_px: float) -> float:
        return self.pixels_to_mm(acceleration_px)
    
    def acceleration_to_meters_per_second_squared(self, acceleration_px: float) -> float:
        return self.pixels_to_meters(acceleration_px)
    
    def describe(self) -> str:
        return f"Device DPI: X={self.xdpi}, Y={self.ydpi}"
