#!/usr/bin/env python3
"""
Home Guard Manager Server

Starts the management API server with:
- Alarm / arming status
- Sensor management and activation
- Camera frame upload (cat detection)

Usage:
    python -m home_guard.server --data-file ./data/security_state.json
    python -m home_guard.server --fake-images
"""

import argparse
import logging

import uvicorn

from .api.manager import create_app
from .config import SecurityConfig
from .hardware.image_service import FakeImageService, ImageService, YOLOImageService
from .services.repository import FileSecurityRepository
from .services.security_service import SecurityService
from .testing.standard_config import seed_repository


logger = logging.getLogger(__name__)


def build_image_service(config: SecurityConfig) -> ImageService:
    if config.use_fake_image_service:
        return FakeImageService(probability=config.fake_cat_probability)
    return YOLOImageService(model_name=config.model_name, device=config.device)


def build_service(config: SecurityConfig) -> SecurityService:
    """Wire the file repository, image service and engine."""
    repository = FileSecurityRepository(config.data_file)
    added = seed_repository(repository)
    if added:
        logger.info("Seeded %d standard sensors", added)

    return SecurityService(repository, build_image_service(config), config)


def main():
    parser = argparse.ArgumentParser(description="Home Guard Manager Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8080, help="Port to bind to")
    parser.add_argument("--data-file", default=SecurityConfig.data_file, help="State JSON file")
    parser.add_argument("--threshold", type=float, default=SecurityConfig.cat_confidence_threshold,
                        help="Cat confidence threshold (percent)")
    parser.add_argument("--model", default=SecurityConfig.model_name, help="YOLO weights")
    parser.add_argument("--device", default=SecurityConfig.device, help="'cpu' or 'cuda'")
    parser.add_argument("--fake-images", action="store_true", help="Use random cat detection")
    parser.add_argument("--log-level", default="INFO", help="Logging level")

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    config = SecurityConfig(
        cat_confidence_threshold=args.threshold,
        data_file=args.data_file,
        model_name=args.model,
        device=args.device,
        use_fake_image_service=args.fake_images,
    )

    print(f"""
╔═══════════════════════════════════════════════════════════╗
║           Home Guard Manager v1.0.0                       ║
║                                                           ║
║   API:     http://{args.host}:{args.port}/docs                       ║
║                                                           ║
║   Features:                                               ║
║   - Alarm / Arming Status                                 ║
║   - Sensor Management and Activation                      ║
║   - Camera Cat Detection                                  ║
╚═══════════════════════════════════════════════════════════╝
""")

    app = create_app(build_service(config))

    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
