"""SQLAdmin model and tool views."""

from sqladmin import BaseView, ModelView, expose
from starlette.requests import Request
from starlette.responses import HTMLResponse

from cinebooker.database import AsyncSessionLocal
from cinebooker.models import Booking, Movie, Review, Screen, Showtime, Theater, User
from cinebooker.scripts.seed_catalog import seed_catalog_in
from cinebooker.tasks.release_holds import release_expired_holds_in


class UserAdmin(ModelView, model=User):
    column_list = [User.id, User.email, User.name, User.role, User.theater_id]
    column_searchable_list = [User.email, User.name]
    column_sortable_list = [User.email, User.role]


class MovieAdmin(ModelView, model=Movie):
    column_list = [
        Movie.id,
        Movie.title,
        Movie.language,
        Movie.genre,
        Movie.rating,
        Movie.status,
    ]
    column_searchable_list = [Movie.title]
    column_sortable_list = [Movie.title, Movie.rating]


class TheaterAdmin(ModelView, model=Theater):
    column_list = [Theater.id, Theater.name, Theater.city, Theater.status]
    column_searchable_list = [Theater.name, Theater.city]
    column_sortable_list = [Theater.name, Theater.city, Theater.status]


class ScreenAdmin(ModelView, model=Screen):
    column_list = [Screen.id, Screen.theater_id, Screen.name, Screen.format]
    column_searchable_list = [Screen.theater_id]


class ShowtimeAdmin(ModelView, model=Showtime):
    column_list = [
        Showtime.id,
        Showtime.movie_id,
        Showtime.theater_id,
        Showtime.screen_id,
        Showtime.show_date,
        Showtime.show_time,
        Showtime.total_seats,
    ]
    column_searchable_list = [Showtime.movie_id, Showtime.theater_id]
    column_sortable_list = [Showtime.show_date, Showtime.show_time]


class BookingAdmin(ModelView, model=Booking):
    column_list = [
        Booking.id,
        Booking.user_id,
        Booking.showtime_id,
        Booking.seats,
        Booking.total_amount,
        Booking.booking_status,
        Booking.checked_in,
    ]
    column_searchable_list = [Booking.id, Booking.check_in_code]
    # Bookings change only through the booking and check-in flows
    can_create = False
    can_edit = False


class ReviewAdmin(ModelView, model=Review):
    column_list = [Review.id, Review.movie_id, Review.user_id, Review.rating]
    can_create = False


_TOOLS_TEMPLATE = """\
{% extends "sqladmin/layout.html" %}
{% block content %}
<div class="container-fluid p-4">
  <h2>Catalog &amp; Seat Tools</h2>
  <form method="post" class="mt-3 d-flex align-items-center gap-2 flex-wrap">
    <button name="action" value="seed" class="btn btn-primary">Seed Demo Catalog</button>
    <button name="action" value="release_holds" class="btn btn-secondary">Release Expired Holds</button>
  </form>
  {% if message %}
  <div class="alert alert-success mt-3">{{ message }}</div>
  {% endif %}
</div>
{% endblock %}
"""


class ToolsView(BaseView):
    name = "Tools"
    icon = "fa-wrench"

    @expose("/tools", methods=["GET", "POST"])
    async def tools(self, request: Request) -> HTMLResponse:
        message: str | None = None

        if request.method == "POST":
            form = await request.form()
            action = form.get("action")
            if action == "seed":
                async with AsyncSessionLocal() as db:
                    added = await seed_catalog_in(db)
                    await db.commit()
                message = "Seeded " + ", ".join(f"{count} {table}" for table, count in added.items()) + "."
            elif action == "release_holds":
                async with AsyncSessionLocal() as db:
                    released = await release_expired_holds_in(db)
                    await db.commit()
                message = f"Released {released} expired holds."

        tmpl = self.templates.env.from_string(_TOOLS_TEMPLATE)
        content = await tmpl.render_async(request=request, message=message)
        return HTMLResponse(content)
