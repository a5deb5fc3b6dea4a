"""Canned YouTube Data API payloads shared by the test modules."""


def search_item(video_id, title=None, thumbs=None):
    return {
        "kind": "youtube#searchResult",
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {
            "title": title or f"Video {video_id}",
            "channelTitle": "Channel",
            "channelId": "UC123",
            "description": "desc",
            "publishedAt": "2024-05-01T10:00:00Z",
            "thumbnails": thumbs if thumbs is not None else {
                "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
                "medium": {"url": f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg"},
            },
        },
    }


def search_body(*video_ids, next_token=None):
    body = {"kind": "youtube#searchListResponse", "items": [search_item(v) for v in video_ids]}
    if next_token:
        body["nextPageToken"] = next_token
    return body


def error_body(code, message, reason):
    return {"error": {"code": code, "message": message, "errors": [{"reason": reason, "message": message}]}}
