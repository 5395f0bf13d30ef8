"""Image Gateway Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Serverless image upload and delivery gateway using AWS Lambda, S3, and Pillow"
)

__all__ = ["handlers", "core"]
