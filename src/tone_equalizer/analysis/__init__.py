from .response import biquad_response_db, cascade_response_db, plot_response

__all__ = ["biquad_response_db", "cascade_response_db", "plot_response"]
