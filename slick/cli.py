from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys

DEFAULT_CONFIG = "~/.config/slick/config.yml"


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    parser = argparse.ArgumentParser(description="Slick Slack app router")
    sub = parser.add_subparsers(dest="command")

    # Serve
    serve_parser = sub.add_parser("serve", help="Serve a Slick app over HTTP")
    serve_parser.add_argument("--app", required=True, help="App to serve, as 'module:attribute'")
    serve_parser.add_argument("--config", default=DEFAULT_CONFIG)

    # Sign
    sign_parser = sub.add_parser("sign", help="Print Slack signature headers for a body")
    sign_parser.add_argument("body")
    sign_parser.add_argument("--key", help="Signing key (defaults to config/env)")
    sign_parser.add_argument("--timestamp", type=int)
    sign_parser.add_argument("--config", default=DEFAULT_CONFIG)

    # Send
    send_parser = sub.add_parser("send", help="POST a signed body to a running app")
    send_parser.add_argument("body")
    send_parser.add_argument("--url", help="Endpoint URL (defaults to the configured server)")
    send_parser.add_argument("--config", default=DEFAULT_CONFIG)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    from slick.shared.config import load_config

    config = load_config(os.path.expanduser(args.config))

    if args.command == "serve":
        from slick.server.main import load_app, run_server

        asyncio.run(run_server(load_app(args.app), config))
    elif args.command == "sign":
        from slick.shared.auth import sign_request

        key = args.key or config.signing_key
        if not key:
            print("No signing key: pass --key or set SLACK_SIGNING_KEY", file=sys.stderr)
            sys.exit(1)
        print(json.dumps(sign_request(args.body, key, args.timestamp), indent=2))
    elif args.command == "send":
        import httpx

        from slick.shared.auth import sign_request

        if not config.signing_key:
            print("No signing key: set SLACK_SIGNING_KEY", file=sys.stderr)
            sys.exit(1)
        url = args.url or f"http://localhost:{config.port}{config.path}"
        body = args.body.encode()
        headers = sign_request(body, config.signing_key)
        if body.startswith(b"{"):
            headers["Content-Type"] = "application/json"
        else:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
        with httpx.Client(timeout=10) as http:
            resp = http.post(url, content=body, headers=headers)
        print(resp.status_code)
        if resp.content:
            print(resp.text)
        sys.exit(0 if resp.is_success else 1)


if __name__ == "__main__":
    main()
