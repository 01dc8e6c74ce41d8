import argparse
import uvicorn

from shared.config import ServiceConfig

SERVICES = {
    "backend": "app:app",
    "narration": "services.narration.app:app",
}


def build_parser(service_config: ServiceConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bootloader for the slide narration FastAPI services.")
    parser.add_argument("service", nargs="?", default="backend", choices=SERVICES.keys(), help="Service to start")
    parser.add_argument("--host", default=service_config.get("host", "0.0.0.0"), help="Host to bind")
    parser.add_argument("--port", type=int, default=service_config.get("port", 3000), help="Port to bind")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (dev mode)")
    return parser


def main(argv=None):
    service_config = ServiceConfig()
    args = build_parser(service_config).parse_args(argv)

    app_path = SERVICES[args.service]
    credential = "configured" if service_config.credential_configured() else "NOT configured"
    print(f"[BOOTLOADER] Starting {args.service} on {args.host}:{args.port} (narration credential {credential}) ...")
    uvicorn.run(app_path, host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
