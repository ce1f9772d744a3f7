import os
import time

import httpx

GATEWAY_URL = os.getenv("GATEWAY_URL", "http://localhost:8180")
GATEWAY_API_KEY = os.getenv("GATEWAY_API_KEY", "")
CLIENT_COUNT = int(os.getenv("CLIENT_COUNT", "5"))


def main() -> None:
    with httpx.Client(base_url=GATEWAY_URL, timeout=5.0) as client:
        for _ in range(CLIENT_COUNT):
            response = client.post("/snowflakes", json={"api_key": GATEWAY_API_KEY, "timestamp": int(time.time() * 1000)})
            response.raise_for_status()
            generated = response.json()
            decoded = client.post("/snowflakes/decode", json={"encoded": generated["encoded"]})
            decoded.raise_for_status()
            fields = decoded.json()
            print(
                "snowflake:", generated["snowflake"],
                "encoded:", generated["encoded"],
                "date:", fields["date"],
                "increment:", fields["increment"],
            )
        print(client.get("/metrics").text)


if __name__ == "__main__":
    main()
