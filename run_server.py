"""Run the API under uvicorn using the configured host and port."""

if __name__ == "__main__":
    import uvicorn

    from bookshelf.settings import app_settings

    uvicorn.run(
        "bookshelf:application",
        factory=True,
        host=app_settings.HOST,
        port=app_settings.PORT,
    )
