"""Hello World: the simplest treeroute app.

Demonstrates directory mounting, index routes, return-value content
negotiation, stack middleware, and custom error handlers.

Routes come from the ``routes/`` directory next to this file::

    routes/index.py          ->  /
    routes/greet.py          ->  /greet  (and /greet/<name>)
    routes/api/status.py     ->  /api/status
    routes/users/index.py    ->  /users
    routes/users/profile.py  ->  /users/profile

Run:
    python app.py
"""

from pathlib import Path

from treeroute import App, Request

app = App()


async def powered_by(request, response, next):
    downstream = await next()
    return downstream.with_header("X-Powered-By", "treeroute")


app.use("/", powered_by)
app.mount("routes", base_dir=Path(__file__).parent)


@app.error(404)
def not_found(request: Request):
    return f"Nothing at {request.path}"


if __name__ == "__main__":
    app.run()
