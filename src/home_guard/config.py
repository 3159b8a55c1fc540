"""
Home Guard Configuration

Runtime settings for the engine, the repository and the image adapters.
"""

from dataclasses import dataclass


@dataclass
class SecurityConfig:
    """Configuration for the security engine and its adapters."""
    # Cat detection threshold, percent (0-100)
    cat_confidence_threshold: float = 50.0

    # Repository
    data_file: str = "./data/security_state.json"

    # YOLO image service
    model_name: str = "yolo11n.pt"
    device: str = "cpu"

    # Fake image service (no camera/model available)
    use_fake_image_service: bool = False
    fake_cat_probability: float = 0.5

    def __post_init__(self):
        if not 0.0 <= self.cat_confidence_threshold <= 100.0:
            raise ValueError("cat_confidence_threshold must be between 0 and 100")
        if not 0.0 <= self.fake_cat_probability <= 1.0:
            raise ValueError("fake_cat_probability must be between 0.0 and 1.0")
