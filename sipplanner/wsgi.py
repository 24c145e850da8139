#setup: pip install -e ".[test]"
#setup: flask --app sipplanner.wsgi run --port 5000 --debug

from sipplanner.app import create_app

app = create_app()


if __name__ == "__main__":
    app.run(port=5000, debug=True)
