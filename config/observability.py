import logfire

from config.settings import Settings


def configure_logfire(settings: Settings) -> bool:
    """Set up logfire; the service keeps running without credentials"""
    try:
        logfire.configure(
            token=settings.logfire_token,
            send_to_logfire="if-token-present",
            service_name="chefbook-core",
            console=logfire.ConsoleOptions(min_log_level=settings.log_level),
            scrubbing=False,
        )
        logfire.instrument_pydantic(record="failure")
    except Exception as e:
        print(f"⚠️  Logfire setup skipped: {e}")
        return False
    return True
