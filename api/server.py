import argparse
import dataclasses
from typing import List, Optional

import uvicorn

from api.main import create_app
from utils.config import RESOURCES, load_config


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Serve the movie catalog or user registry API.")
    parser.add_argument("--resource", choices=RESOURCES, default=None, help="Table to expose (default: APP_RESOURCE).")
    parser.add_argument("--host", default=None, help="Bind address (default: HOST or 0.0.0.0).")
    parser.add_argument("--port", type=int, default=None, help="Listen port (default: PORT or 3000).")
    parser.add_argument("--env-file", default=".env", help="dotenv file to load before reading settings.")
    args = parser.parse_args(argv)

    config = load_config(args.env_file)
    overrides = {key: value for key, value in {"resource": args.resource, "host": args.host, "port": args.port}.items() if value is not None}
    config = dataclasses.replace(config, **overrides)

    app = create_app(config)
    # lifespan="on" makes a failed table bootstrap abort the process instead of serving.
    uvicorn.run(app, host=config.host, port=config.port, lifespan="on", log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
