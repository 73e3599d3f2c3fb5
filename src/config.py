"""SmartTunnel configuration and CLI loader."""

from constants import DEFAULT_STORE_FILE, INTRANET_PROBE_TIMEOUT, IPV6_PROBE_TIMEOUT


class TunnelConfig:
    def __init__(self):
        self.store_file = DEFAULT_STORE_FILE
        self.domain_matching = "loose"
        self.log_access_file = None
        self.log_error_file = None
        self.stats_file = None
        self.quiet = False
        self.verify_tls = True
        self.intranet_timeout = INTRANET_PROBE_TIMEOUT
        self.ipv6_timeout = IPV6_PROBE_TIMEOUT
        self.dry_run = False


class ConfigLoader:
    @staticmethod
    def load_from_args(args) -> TunnelConfig:
        config = TunnelConfig()
        config.store_file = args.store
        config.domain_matching = args.domain_matching
        config.log_access_file = args.log_access
        config.log_error_file = args.log_error
        config.stats_file = args.stats_file
        config.quiet = args.quiet
        config.verify_tls = not args.insecure
        config.dry_run = getattr(args, "dry_run", False)
        if args.intranet_timeout:
            config.intranet_timeout = args.intranet_timeout
        if args.ipv6_timeout:
            config.ipv6_timeout = args.ipv6_timeout
        return config
