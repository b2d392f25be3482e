"""CLI entry point for english-detector.

The FastAPI app and uvicorn are imported lazily inside command handlers so
that `detect` and `--help` do not pay for them.
"""
from __future__ import annotations

import argparse
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional


def _runs_dir(cfg: Dict[str, Any]) -> Path:
    from .utils import resolve_paths

    return resolve_paths(artifacts_dir_cfg=str(cfg.get("paths", {}).get("artifacts_dir", ""))).runs_dir


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _serve(config_path: str, host: str, port: int) -> None:
    import uvicorn

    from .config import CONFIG_ENV_VAR

    os.environ[CONFIG_ENV_VAR] = config_path
    uvicorn.run("english_detector.api.main:app", host=host, port=port, reload=False)


def _detect(
    config_path: str, texts: List[str], default_on_undetermined: bool, methods: Optional[List[str]] = None
) -> None:
    from .detection.factory import build_policy

    policy = build_policy(config_path)
    if len(texts) == 1:
        out: Any = policy.classify(texts[0], default_on_undetermined, methods).to_dict()
    else:
        out = [item.to_dict() for item in policy.classify_batch(texts, default_on_undetermined, methods)]
    print(json.dumps(out, indent=2, ensure_ascii=False))


def _report(config_path: str) -> None:
    from .config import load_config
    from .monitoring.daily_report import generate_report

    cfg = load_config(config_path)
    log_name = str(cfg.get("logging", {}).get("request_log_name", "requests.jsonl"))
    report = generate_report(_runs_dir(cfg) / log_name)
    print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Main CLI definition
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    from .config import default_config_path

    parser = argparse.ArgumentParser(prog="english-detector")
    sub = parser.add_subparsers(dest="cmd", required=True)

    # --- serve ---
    p_serve = sub.add_parser("serve", help="Run FastAPI server")
    p_serve.add_argument("--config", default=default_config_path())
    p_serve.add_argument("--host", default="0.0.0.0")
    p_serve.add_argument("--port", type=int, default=3000)

    # --- detect ---
    p_detect = sub.add_parser("detect", help="Classify one or more texts and print JSON")
    p_detect.add_argument("--config", default=default_config_path())
    p_detect.add_argument(
        "--default-on-undetermined",
        action="store_true",
        help="Report undetermined texts as English",
    )
    p_detect.add_argument(
        "--method",
        action="append",
        choices=["lingua", "langdetect"],
        help="Detection engine to try; repeat to chain (default: from config)",
    )
    p_detect.add_argument("texts", nargs="+")

    # --- report ---
    p_report = sub.add_parser("report", help="Summarize the request log")
    p_report.add_argument("--config", default=default_config_path())

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    from .config import load_config, load_env
    from .logging_utils import setup_logging_from_config

    load_env()
    args = build_parser().parse_args(argv)

    setup_logging_from_config(load_config(args.config).get("logging"))

    # ---- Dispatch ----
    if args.cmd == "serve":
        _serve(args.config, host=args.host, port=args.port)

    elif args.cmd == "detect":
        _detect(
            args.config,
            texts=args.texts,
            default_on_undetermined=args.default_on_undetermined,
            methods=args.method,
        )

    elif args.cmd == "report":
        _report(args.config)


if __name__ == "__main__":
    main()
