import logging
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from placeskit.config.logging_setup import get_logger, setup_logging
from placeskit.providers.cache import MemoryCache
from placeskit.providers.errors import InvalidConfiguration, Result
from placeskit.providers.google.client import GooglePlacesClient, create_client
from placeskit.providers.google.response import PlacesResponse
from placeskit.providers.settings import get_settings

app = typer.Typer(help="Manual testing tool for the Google Places and Geocoding APIs")
console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs (cache hits, requests)"),
):
    """
    Query Google Places from the terminal and inspect the parsed responses.
    """
    setup_logging()
    if verbose:
        package_logger = get_logger("placeskit")
        package_logger.setLevel(logging.DEBUG)
        for handler in package_logger.handlers:
            handler.setLevel(logging.DEBUG)


def get_client() -> GooglePlacesClient:
    """Build a client from the environment or exit with an error."""
    try:
        return create_client()
    except InvalidConfiguration as e:
        console.print(f"[bold red]Error: {e.message}")
        raise typer.Exit(code=1)


def unwrap(result: Result[PlacesResponse]) -> PlacesResponse:
    """Return the response or print the error and exit."""
    if result.is_err:
        console.print(f"[bold red]Error: {result.error.message}")
        raise typer.Exit(code=1)
    return result.value


def print_json(response: PlacesResponse):
    console.print_json(data=response.get_all())


def print_results_table(rows: List[Dict[str, Any]], title: str):
    """Table of places from a search-like response."""
    if not rows:
        console.print("[yellow]No results found.")
        return

    table = Table(title=title, show_header=True, header_style="bold green")
    table.add_column("#")
    table.add_column("Name")
    table.add_column("Address")
    table.add_column("Rating")
    table.add_column("Place ID")

    for i, place in enumerate(rows):
        rating = place.get("rating")
        table.add_row(
            str(i + 1),
            place.get("name") or "-",
            place.get("formatted_address") or place.get("vicinity") or "-",
            f"{rating:.1f}" if rating is not None else "-",
            place.get("place_id") or "-",
        )

    console.print(table)


def print_key_values(title: str, values: Dict[str, Any]):
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in values.items():
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)


@app.command()
def geocode(
    address: str = typer.Argument(..., help="Address to geocode (ex: '1600 Amphitheatre Pkwy, Mountain View')"),
    region: Optional[str] = typer.Option(None, help="Region bias (ccTLD, ex: 'us')"),
    language: Optional[str] = typer.Option(None, help="Result language (ex: 'en')"),
    json_output: bool = typer.Option(False, "--json", help="Print the raw JSON payload"),
):
    """
    Geocode an address.
    """
    params = {}
    if region:
        params["region"] = region
    if language:
        params["language"] = language

    with get_client() as client:
        response = unwrap(client.geocode(address, params))

    if json_output:
        print_json(response)
        return

    if not response.results:
        console.print("[yellow]No results found.")
        return

    console.print(f"\n[bold]{response.formatted_address}")
    coordinates = response.coordinates
    if coordinates:
        console.print(f"Coordinates: [cyan]{coordinates['latitude']}, {coordinates['longitude']}[/]")
    console.print(f"Place ID: [cyan]{response.place_id}[/]")
    print_key_values("Address", response.structured_address)
    if response.types:
        console.print(f"Types: [cyan]{', '.join(response.types)}[/]")
    if response.plus_code:
        console.print(f"Plus code: [cyan]{response.plus_code}[/]")


@app.command()
def details(
    place_id: str = typer.Argument(..., help="Google Place ID"),
    field: Optional[List[str]] = typer.Option(None, "--field", "-f", help="Field to request (repeatable)"),
    json_output: bool = typer.Option(False, "--json", help="Print the raw JSON payload"),
):
    """
    Show the details of a place.
    """
    with get_client() as client:
        response = unwrap(client.place_details(place_id, field or []))

    if json_output:
        print_json(response)
        return

    place = response.first_result
    if not place:
        console.print("[yellow]No results found.")
        return

    console.print(f"\n[bold]{place.get('name', place_id)}")
    print_key_values("Place", {
        "Address": response.formatted_address,
        "Phone": response.formatted_phone_number,
        "International phone": response.international_phone_number,
        "Website": response.website,
        "Google Maps": response.place_url,
        "Rating": response.rating,
        "Ratings": response.user_ratings_total,
        "Price": response.formatted_price_level,
        "Status": response.formatted_business_status,
        "Open now": response.is_open_now,
        "Summary": response.editorial_summary,
    })

    hours = response.opening_hours_text()
    if hours:
        console.print("[bold]Opening hours")
        for line in hours:
            console.print(f"  {line}")

    current = response.current_opening_period()
    if current:
        closes = "never" if current.is_24_7 else current.close_time
        console.print(f"Current period: opened [cyan]{current.open_time}[/], closes [cyan]{closes}[/]")

    amenities = response.amenities
    if amenities:
        console.print(f"Amenities: [cyan]{', '.join(amenities.values())}[/]")

    reviews = response.reviews
    if reviews:
        table = Table(title="Reviews", show_header=True, header_style="bold green")
        table.add_column("Author")
        table.add_column("Rating")
        table.add_column("Text")
        for review in reviews:
            table.add_row(
                review.get("author_name", "-"),
                str(review.get("rating", "-")),
                (review.get("text") or "")[:80],
            )
        console.print(table)


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to search for (ex: 'pizza in Seattle')"),
    place_type: Optional[str] = typer.Option(None, "--type", help="Restrict to a place type (ex: 'restaurant')"),
    language: Optional[str] = typer.Option(None, help="Result language (ex: 'en')"),
    find: bool = typer.Option(False, "--find", help="Use Find Place instead of Text Search"),
    page_token: Optional[str] = typer.Option(None, help="next_page_token from a previous search"),
    json_output: bool = typer.Option(False, "--json", help="Print the raw JSON payload"),
):
    """
    Search places by text.
    """
    with get_client() as client:
        if place_type:
            client.set_search_type(place_type)
        if language:
            client.set_language(language)
        if page_token:
            client.set_page_token(page_token)

        if find:
            response = unwrap(client.find_places(query))
        else:
            response = unwrap(client.text_search(query))

    if json_output:
        print_json(response)
        return

    rows = response.candidates if find else response.results
    print_results_table(rows, f"Results for '{query}'")
    if response.has_more_results:
        console.print(f"More results: [cyan]--page-token {response.next_page_token}[/]")


@app.command()
def nearby(
    lat: float = typer.Argument(..., help="Latitude"),
    lng: float = typer.Argument(..., help="Longitude"),
    radius: int = typer.Option(1000, help="Radius in meters (max 50000)"),
    place_type: Optional[str] = typer.Option(None, "--type", help="Restrict to a place type"),
    keyword: Optional[str] = typer.Option(None, help="Keyword to match"),
    open_now: bool = typer.Option(False, "--open-now", help="Only places open now"),
    json_output: bool = typer.Option(False, "--json", help="Print the raw JSON payload"),
):
    """
    Search places around a point.
    """
    with get_client() as client:
        if place_type:
            client.set_search_type(place_type)
        if keyword:
            client.set_search_keyword(keyword)
        if open_now:
            client.set_open_now(True)
        response = unwrap(client.nearby_search(lat, lng, radius))

    if json_output:
        print_json(response)
        return

    print_results_table(response.results, f"Places near {lat}, {lng}")


@app.command()
def autocomplete(
    input_text: str = typer.Argument(..., help="Partial text to complete"),
    place_type: Optional[List[str]] = typer.Option(None, "--type", help="Prediction type filter (repeatable)"),
    components: Optional[str] = typer.Option(None, help="Component filter (ex: 'country:us')"),
    session_token: Optional[str] = typer.Option(None, help="Session token grouping autocomplete calls"),
    query: bool = typer.Option(False, "--query", help="Use Query Autocomplete"),
    json_output: bool = typer.Option(False, "--json", help="Print the raw JSON payload"),
):
    """
    Get autocomplete predictions.
    """
    with get_client() as client:
        if place_type:
            client.set_autocomplete_types(place_type)
        if components:
            client.set_autocomplete_components(components)
        if session_token:
            client.set_session_token(session_token)

        if query:
            response = unwrap(client.query_autocomplete(input_text))
        else:
            response = unwrap(client.autocomplete(input_text))

    if json_output:
        print_json(response)
        return

    predictions = response.predictions
    if not predictions:
        console.print("[yellow]No predictions found.")
        return

    table = Table(show_header=True, header_style="bold green")
    table.add_column("#")
    table.add_column("Description")
    table.add_column("Place ID")
    for i, prediction in enumerate(predictions):
        table.add_row(str(i + 1), prediction.get("description", "-"), prediction.get("place_id") or "-")
    console.print(table)


@app.command()
def photo_url(
    reference: str = typer.Argument(..., help="Photo reference from a place result"),
    max_width: Optional[int] = typer.Option(None, help="Maximum width in pixels"),
    max_height: Optional[int] = typer.Option(None, help="Maximum height in pixels"),
):
    """
    Print the URL of a place photo.
    """
    with get_client() as client:
        console.print(client.photo_url(reference, max_width, max_height), soft_wrap=True)


@app.command()
def clear_cache(
    identifier: Optional[str] = typer.Argument(None, help="Cache identifier to remove (all entries when omitted)"),
):
    """
    Clear cached responses (file cache backend only).
    """
    with get_client() as client:
        if isinstance(client.cache, MemoryCache):
            console.print(
                "[bold red]Error: the memory cache backend keeps nothing between runs. "
                "Set GOOGLE_PLACES_CACHE_BACKEND=file to use a persistent cache."
            )
            raise typer.Exit(code=1)
        removed = client.clear_cache(identifier)
    console.print(f"[green]Removed {removed} cache entries.")


@app.command()
def settings():
    """
    Show the active configuration.
    """
    values = get_settings().to_dict()
    api_key = values.get("google_places_api_key")
    if api_key:
        # Short keys are hidden entirely
        values["google_places_api_key"] = "****" if len(api_key) <= 8 else "****" + api_key[-4:]
    print_key_values("Settings", values)


def main():
    app()


if __name__ == "__main__":
    main()
