from collections import namedtuple

# Record exposed in the aggregated multi-provider channel listing
Channel = namedtuple(
    'Channel',
    ['id', 'name', 'url', 'logo_url', 'category', 'language', 'is_hd', 'is_custom']
)
