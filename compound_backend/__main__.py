#setup: pip install -e ".[test]"
#setup: python -m compound_backend   # or: flask --app compound_backend.app run --debug

from compound_backend.app import create_app
from compound_backend.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    create_app(settings).run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)
