import sys

from winrepair.app_factory import create_app, create_task_service
from winrepair.cli.args import parse_args
from winrepair.cli.controller import load_settings, run_repair


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.command == "serve":
        app = create_app(load_settings(args.ini))
        app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"])
        return 0

    return run_repair(args, service_factory=create_task_service)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.")
        sys.exit(130)
