# illustrative usage against a running Ollama / OpenAI-compatible server
# reads SHARPAI_ENDPOINT (and optional SHARPAI_BEARER_TOKEN, ...) from the environment or a .env file
#   python demo/demo.py

import asyncio
import json
import logging

from sharpai import SdkConfiguration, SdkError, SharpAISdk

MODEL = "llama3.1:latest"


def print_token(line: str) -> None:
    if not line:
        return
    try:
        data = json.loads(line)
    except json.JSONDecodeError:
        return
    print(data.get("response", ""), end="", flush=True)


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    sdk = SharpAISdk(config=SdkConfiguration.from_env())

    try:
        print("connectivity:", await sdk.validate_connectivity())
        print("models:", await sdk.ollama.list_local_models())

        # callback streaming
        await sdk.ollama.generate_completion(
            {"model": MODEL, "prompt": "Once upon a time", "stream": True},
            on_token=print_token,
        )
        print()

        # iterator streaming
        async for line in sdk.ollama.stream_chat_completion(
            {"model": MODEL, "messages": [{"role": "user", "content": "Hello!"}], "stream": True}
        ):
            if line:
                print(line)

        chat = await sdk.openai.generate_chat_completion(
            {"model": MODEL, "messages": [{"role": "user", "content": "Hello, how are you?"}]}
        )
        print(chat)
    except SdkError as e:
        print(f"error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
