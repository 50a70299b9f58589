from sheet_uploader.cli import app

if __name__ == "__main__":
    app()
