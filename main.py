"""
Roblox user monitor: watch one user's badges and presence, post changes to a Discord webhook.
"""
import uvicorn

from config import load_config
from logging_setup import get_logger, setup_logging
from monitor import Monitor
from pipeline.notifier import WebhookNotifier
from providers.roblox import RobloxProvider
from server import create_app


def main() -> None:
    cfg = load_config()
    setup_logging(cfg.log_level)
    log = get_logger("main")

    monitor = Monitor(
        provider=RobloxProvider(cfg.user_id, cfg.badge_limit),
        notifier=WebhookNotifier(cfg.webhook_url),
        interval=cfg.check_interval,
        user_id=cfg.user_id,
    )
    log.info(
        "starting_monitor",
        user_id=cfg.user_id,
        check_interval=cfg.check_interval,
        webhook_configured=monitor.notifier.configured,
    )
    app = create_app(monitor, cfg.user_id)
    log.info("server_running", host=cfg.host, port=cfg.port)
    uvicorn.run(app, host=cfg.host, port=cfg.port, log_level=cfg.log_level)


if __name__ == "__main__":
    main()
