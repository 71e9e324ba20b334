from flask import Flask, request, Response, jsonify
import logging

from tvgate import config, plugins

logger = logging.getLogger(__name__)

app = Flask(__name__)

plugins.init_app(app, config.PLUGINS)


@app.route('/channels')
def channels():
    # Combined channel listing of every enabled provider
    return jsonify([channel._asdict() for channel in plugins.get_channels(app)])


@app.route('/playlist.m3u')
def playlist():
    # M3U playlist pointing every channel back at this proxy
    host_url = request.host_url
    lines = ["#EXTM3U"]
    for channel in plugins.get_channels(app):
        lines.append(
            f'#EXTINF:-1 tvg-id="{channel.id}" tvg-logo="{channel.logo_url}",{channel.name}'
        )
        lines.append(f"{host_url}{channel.url}.m3u8")
    return Response("\n".join(lines), content_type="application/vnd.apple.mpegurl")


@app.route('/')
def index():
    enabled = ", ".join(config.PLUGINS) or "none"
    return f"tvgate is running. Enabled providers: {enabled}"


if __name__ == '__main__':
    # Use port 7860 by default, but allow it to be overridden with the PORT environment variable
    logger.info(f"Proxy ONLINE - Listening on port {config.PORT}")
    app.run(host="0.0.0.0", port=config.PORT, debug=False, threaded=True)
