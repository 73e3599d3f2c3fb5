"""Decision statistics tracking."""

from typing import Dict

from interfaces import IStatistics


class DecisionStats(IStatistics):
    def __init__(self):
        self.runs = 0
        self.unmatched = 0
        self.intranet_redirects = 0
        self.ipv6_redirects = 0
        self.no_action = 0
        self.probe_failures = 0
        self.errors = 0

    def increment_runs(self) -> None:
        self.runs += 1

    def increment_unmatched(self) -> None:
        self.unmatched += 1

    def increment_intranet_redirects(self) -> None:
        self.intranet_redirects += 1

    def increment_ipv6_redirects(self) -> None:
        self.ipv6_redirects += 1

    def increment_no_action(self) -> None:
        self.no_action += 1

    def increment_probe_failures(self) -> None:
        self.probe_failures += 1

    def increment_errors(self) -> None:
        self.errors += 1

    def get_stats_display(self) -> str:
        col_width = 24
        return (
            f"\033[97mRuns: \033[93m{self.runs}\033[0m".ljust(col_width)
            + "\033[97m| "
            + f"\033[97mIntranet: \033[92m{self.intranet_redirects}\033[0m".ljust(col_width)
            + "\033[97m| "
            + f"\033[97mIPv6: \033[96m{self.ipv6_redirects}\033[0m".ljust(col_width)
            + "\033[97m| "
            + f"\033[97mStay: \033[97m{self.no_action + self.unmatched}\033[0m".ljust(col_width)
            + "\033[97m| "
            + f"\033[97mProbe errors: \033[91m{self.probe_failures}\033[0m"
        )

    def snapshot(self) -> Dict[str, object]:
        redirects = self.intranet_redirects + self.ipv6_redirects
        return {
            "runs": self.runs,
            "unmatched": self.unmatched,
            "intranet_redirects": self.intranet_redirects,
            "ipv6_redirects": self.ipv6_redirects,
            "no_action": self.no_action,
            "probe_failures": self.probe_failures,
            "errors": self.errors,
            "redirect_rate": (redirects / self.runs) * 100 if self.runs > 0 else 0.0,
        }
