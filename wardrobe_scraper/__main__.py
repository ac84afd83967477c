from wardrobe_scraper.main import run

run()
