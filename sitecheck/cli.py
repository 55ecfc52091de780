import typer
from sitecheck.services.linkscan.cli import app as linkscan_app

app = typer.Typer(help="sitecheck – site crawler and link checker")

app.add_typer(linkscan_app, name="linkscan", help="Crawl a domain and check every link")

def main():
    app()

if __name__ == "__main__":
    main()
