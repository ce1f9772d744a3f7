from typing import Dict


class MetricsService:
    def __init__(self) -> None:
        self._metrics: Dict[str, int] = {
            "snowflakes_generated_total": 0,
            "snowflakes_deconstructed_total": 0,
            "snowflakes_encoded_total": 0,
            "snowflakes_decoded_total": 0,
            "snowflake_errors_total": 0,
            "api_key_denied_total": 0,
        }

    def inc(self, key: str, amount: int = 1) -> None:
        self._metrics[key] = self._metrics.get(key, 0) + amount

    def get(self, key: str) -> int:
        return self._metrics.get(key, 0)

    def to_prometheus(self) -> str:
        lines = [f"{key} {value}" for key, value in self._metrics.items()]
        return "\n".join(lines) + "\n"
