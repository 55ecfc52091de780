from typing import Iterator
from bs4 import BeautifulSoup

def extract_links(html: str) -> Iterator[str]:
    """Yield every raw ``href`` on the page, in document order.

    Values are passed through untouched, broken ones included; deciding
    what is malformed is the crawler's job.
    """
    if not html:
        return
    soup = BeautifulSoup(html, "html.parser")
    for a in soup.find_all("a", href=True):
        href = a["href"]
        if isinstance(href, list):
            href = " ".join(href)
        yield href
