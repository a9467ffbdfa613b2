from k8s_discovery.cli import app

if __name__ == "__main__":
    app()
