import asyncio

import pytest

SAMPLE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <title>Sample Website</title>
    <meta charset="UTF-8">
</head>
<body>
    <header>
        <h1>Welcome to My Website</h1>
    </header>
    <nav>
        <ul>
            <li><a href="#home">Home</a></li>
            <li><a href="#about">About</a></li>
        </ul>
    </nav>
    <main>
        <section id="home">
            <h2>Home Section</h2>
            <p>This is the home section content.</p>
        </section>
        <div class="content">
            <p>Some content here</p>
        </div>
    </main>
    <footer>
        <p>&copy; 2024 My Website. All rights reserved.</p>
    </footer>
</body>
</html>
"""


class FakeGenerationService:
    """
    Scripted stand-in for the generation service.

    `responses` maps a schema class name to the object (or dict) to return,
    and `None` to the text streamed for schema-less calls. An Exception value
    is raised instead.
    """

    def __init__(self, responses=None, delay: float = 0, chunk_size: int = 16):
        self.responses = responses or {}
        self.delay = delay
        self.chunk_size = chunk_size
        self.calls = []

    async def generate(self, system, prompt, schema=None):
        self.calls.append({"system": system, "prompt": prompt, "schema": schema})
        if self.delay:
            await asyncio.sleep(self.delay)

        key = schema.__name__ if schema is not None else None
        response = self.responses.get(key)
        if isinstance(response, Exception):
            raise response

        if schema is None:
            text = response or ""
            for i in range(0, len(text), self.chunk_size):
                yield {"type": "text-delta", "text": text[i:i + self.chunk_size]}
            return

        yield {"type": "object", "object": response}


@pytest.fixture
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def fake_generator():
    return FakeGenerationService


def collect(async_iterable):
    async def _run():
        return [event async for event in async_iterable]
    return asyncio.run(_run())


@pytest.fixture
def collect_events():
    return collect
