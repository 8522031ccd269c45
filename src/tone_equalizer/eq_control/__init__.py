from .filter_design import design_filter, design_low_shelf, design_peak, design_high_shelf

__all__ = ["design_filter", "design_low_shelf", "design_peak", "design_high_shelf"]
