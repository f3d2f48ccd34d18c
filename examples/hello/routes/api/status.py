async def handler(request, response, next):
    if request.relative_path != "/":
        return await next()
    return {"status": "ok", "version": "0.1.0"}
