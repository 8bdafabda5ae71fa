"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-17 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    # Create theaters table
    op.create_table(
        'theaters',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('location', sa.Text(), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_theaters_city'), 'theaters', ['city'], unique=False)
    op.create_index(op.f('ix_theaters_status'), 'theaters', ['status'], unique=False)

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('role', sa.String(length=30), nullable=False, server_default='customer'),
        sa.Column('theater_id', sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['theater_id'], ['theaters.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=False)

    # Create movies table
    op.create_table(
        'movies',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('poster_url', sa.String(length=1000), nullable=True),
        sa.Column('trailer_url', sa.String(length=1000), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('language', sa.String(length=50), nullable=True),
        sa.Column('genre', sa.String(length=100), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('release_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='now_showing'),
        sa.Column('cast_crew', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_movies_title'), 'movies', ['title'], unique=False)
    op.create_index(op.f('ix_movies_status'), 'movies', ['status'], unique=False)

    # Create screens table
    op.create_table(
        'screens',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('theater_id', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('format', sa.String(length=50), nullable=False, server_default='2D'),
        sa.Column('seat_layout', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['theater_id'], ['theaters.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_screens_theater_id'), 'screens', ['theater_id'], unique=False)

    # Create showtimes table
    op.create_table(
        'showtimes',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('movie_id', sa.String(length=100), nullable=False),
        sa.Column('theater_id', sa.String(length=100), nullable=False),
        sa.Column('screen_id', sa.String(length=100), nullable=False),
        sa.Column('show_date', sa.Date(), nullable=False),
        sa.Column('show_time', sa.Time(), nullable=False),
        sa.Column('price_regular', sa.Float(), nullable=False, server_default='0'),
        sa.Column('price_gold', sa.Float(), nullable=False, server_default='0'),
        sa.Column('price_platinum', sa.Float(), nullable=False, server_default='0'),
        sa.Column('available_seats', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_seats', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['theater_id'], ['theaters.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['screen_id'], ['screens.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_showtimes_movie_id'), 'showtimes', ['movie_id'], unique=False)
    op.create_index(op.f('ix_showtimes_theater_id'), 'showtimes', ['theater_id'], unique=False)
    op.create_index(op.f('ix_showtimes_screen_id'), 'showtimes', ['screen_id'], unique=False)
    op.create_index(op.f('ix_showtimes_show_date'), 'showtimes', ['show_date'], unique=False)

    # Create bookings table
    op.create_table(
        'bookings',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('user_id', sa.String(length=100), nullable=False),
        sa.Column('showtime_id', sa.String(length=100), nullable=False),
        sa.Column('seats', sa.JSON(), nullable=False),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('booking_status', sa.String(length=20), nullable=False, server_default='confirmed'),
        sa.Column('payment_status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('check_in_code', sa.String(length=100), nullable=False),
        sa.Column('checked_in', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('check_in_time', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtimes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_bookings_user_id'), 'bookings', ['user_id'], unique=False)
    op.create_index(op.f('ix_bookings_showtime_id'), 'bookings', ['showtime_id'], unique=False)
    op.create_index(op.f('ix_bookings_booking_status'), 'bookings', ['booking_status'], unique=False)
    op.create_index(op.f('ix_bookings_check_in_code'), 'bookings', ['check_in_code'], unique=True)

    # Create reviews table
    op.create_table(
        'reviews',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('movie_id', sa.String(length=100), nullable=False),
        sa.Column('user_id', sa.String(length=100), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('review_text', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_review_rating'),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_reviews_movie_id'), 'reviews', ['movie_id'], unique=False)
    op.create_index(op.f('ix_reviews_user_id'), 'reviews', ['user_id'], unique=False)

    # Create seat_claims table
    op.create_table(
        'seat_claims',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('showtime_id', sa.String(length=100), nullable=False),
        sa.Column('seat_id', sa.String(length=20), nullable=False),
        sa.Column('user_id', sa.String(length=100), nullable=False),
        sa.Column('booking_id', sa.String(length=100), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtimes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('showtime_id', 'seat_id', name='uq_showtime_seat')
    )
    op.create_index(op.f('ix_seat_claims_showtime_id'), 'seat_claims', ['showtime_id'], unique=False)
    op.create_index(op.f('ix_seat_claims_booking_id'), 'seat_claims', ['booking_id'], unique=False)
    op.create_index(op.f('ix_seat_claims_expires_at'), 'seat_claims', ['expires_at'], unique=False)


def downgrade() -> None:
    op.drop_table('seat_claims')
    op.drop_table('reviews')
    op.drop_table('bookings')
    op.drop_table('showtimes')
    op.drop_table('screens')
    op.drop_table('movies')
    op.drop_table('users')
    op.drop_table('theaters')
