"""mcflation core: models, pipeline services and ambient infrastructure."""
