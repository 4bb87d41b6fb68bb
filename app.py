from src.meeting_tracker.meeting_tracker import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(app.config.get("PORT", 3001)), debug=bool(app.config.get("DEBUG", False)))
