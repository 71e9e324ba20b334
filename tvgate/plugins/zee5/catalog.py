import json
import os
from collections import namedtuple
from functools import lru_cache

from tvgate.television import Channel

PROVIDER = 'zee5'
DATA_FILE = os.path.join(os.path.dirname(__file__), 'data.json')

ChannelEntry = namedtuple('ChannelEntry', ['id', 'name', 'url', 'logo', 'language', 'slug', 'hd'])


@lru_cache(maxsize=None)
def load_channels():
    """Reads the bundled channel list once and keeps it for the process lifetime."""
    with open(DATA_FILE, encoding='utf-8') as f:
        data = json.load(f)
    return tuple(
        ChannelEntry(
            id=item['id'],
            name=item['name'],
            url=item['url'],
            logo=item.get('logo', ''),
            language=item.get('language', 0),
            slug=item.get('slug', ''),
            hd=bool(item.get('hd', False)),
        )
        for item in data.get('data', [])
    )


def find_channel(channel_id):
    for entry in load_channels():
        if entry.id == channel_id:
            return entry
    return None


def get_channels():
    return [
        Channel(
            id=entry.id,
            name=entry.name,
            url=f"{PROVIDER}/{entry.id}",
            logo_url=entry.logo,
            category=0,
            language=entry.language,
            is_hd=entry.hd,
            is_custom=True,
        )
        for entry in load_channels()
    ]
