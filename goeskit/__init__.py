"""Configuration, options, file naming, gradients and product-name parsing for GOES LRIT/HRIT output."""

__version__ = "0.1.0"