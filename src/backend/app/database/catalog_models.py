"""
Read-only ORM mapping of the card catalog schema.

Only the columns needed by universal search are mapped. Table and column
names follow the production schema (note the reserved-word tables "set" and
the "series"/"set" foreign-key columns).
"""

from sqlalchemy import BigInteger, Boolean, Column, ForeignKey, Integer, String

from .database import Base


class Manufacturer(Base):
    __tablename__ = "manufacturer"

    manufacturer_id = Column(BigInteger, primary_key=True)
    name = Column(String(255))


class Color(Base):
    __tablename__ = "color"

    color_id = Column(BigInteger, primary_key=True)
    name = Column(String(100))
    hex_value = Column(String(20))


class CardSet(Base):
    __tablename__ = "set"

    set_id = Column(BigInteger, primary_key=True)
    name = Column(String(255))
    slug = Column(String(255))
    year = Column(Integer)
    manufacturer = Column(BigInteger, ForeignKey("manufacturer.manufacturer_id"))


class Series(Base):
    __tablename__ = "series"

    series_id = Column(BigInteger, primary_key=True)
    name = Column(String(255))
    slug = Column(String(255))
    set_ref = Column("set", BigInteger, ForeignKey("set.set_id"))
    card_count = Column(Integer)
    rookie_count = Column(Integer)
    is_base = Column(Boolean)
    parallel_of_series = Column(BigInteger, ForeignKey("series.series_id"))
    print_run_display = Column(String(50))
    color = Column(BigInteger, ForeignKey("color.color_id"))


class Card(Base):
    __tablename__ = "card"

    card_id = Column(BigInteger, primary_key=True)
    card_number = Column(String(50), index=True)
    series_ref = Column("series", BigInteger, ForeignKey("series.series_id"))
    is_rookie = Column(Boolean)
    is_autograph = Column(Boolean)
    is_relic = Column(Boolean)
    print_run = Column(Integer)


class Organization(Base):
    __tablename__ = "organization"

    organization_id = Column(BigInteger, primary_key=True)
    name = Column(String(255))


class Team(Base):
    __tablename__ = "team"

    team_id = Column(BigInteger, primary_key=True)
    name = Column(String(255))
    slug = Column(String(255))
    city = Column(String(255))
    mascot = Column(String(255))
    abbreviation = Column(String(20))
    primary_color = Column(String(20))
    secondary_color = Column(String(20))
    organization = Column(BigInteger, ForeignKey("organization.organization_id"))


class Player(Base):
    __tablename__ = "player"

    player_id = Column(BigInteger, primary_key=True)
    first_name = Column(String(255))
    last_name = Column(String(255))
    nick_name = Column(String(255))
    slug = Column(String(255))
    card_count = Column(Integer)
    is_hof = Column(Boolean)


class PlayerTeam(Base):
    __tablename__ = "player_team"

    player_team_id = Column(BigInteger, primary_key=True)
    player = Column(BigInteger, ForeignKey("player.player_id"), index=True)
    team = Column(BigInteger, ForeignKey("team.team_id"), index=True)


class CardPlayerTeam(Base):
    __tablename__ = "card_player_team"

    card_player_team_id = Column(BigInteger, primary_key=True)
    card = Column(BigInteger, ForeignKey("card.card_id"), index=True)
    player_team = Column(BigInteger, ForeignKey("player_team.player_team_id"), index=True)
